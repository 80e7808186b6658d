from chipemu.constants import FONT_ADDRESS
from chipemu.sprite import draw_sprite


def test_blank_screen_no_collision(machine):
    assert draw_sprite(machine, 0, 0, 5, FONT_ADDRESS) is False
    assert machine.draw_flag


def test_overlap_sets_collision(machine):
    machine.write(0x300, 0x80)
    draw_sprite(machine, 10, 10, 1, 0x300)
    # shifted by one column: no shared pixel
    assert draw_sprite(machine, 11, 10, 1, 0x300) is False
    assert draw_sprite(machine, 10, 10, 1, 0x300) is True
    assert machine.pixel(10, 10) == 0
    assert machine.pixel(11, 10) == 1


def test_clips_right_edge(machine):
    machine.write(0x300, 0xFF)
    draw_sprite(machine, 60, 0, 1, 0x300)
    fb = machine.framebuffer()
    assert fb[0, 60:].tolist() == [1, 1, 1, 1]
    assert fb[0, :4].tolist() == [0, 0, 0, 0]
    assert fb.sum() == 4


def test_clips_bottom_edge(machine):
    draw_sprite(machine, 0, 30, 5, FONT_ADDRESS)
    fb = machine.framebuffer()
    assert fb[30, :4].tolist() == [1, 1, 1, 1]
    assert fb[31, :4].tolist() == [1, 0, 0, 1]
    assert fb[:30].sum() == 0


def test_origin_wraps(machine):
    machine.write(0x300, 0x80)
    draw_sprite(machine, 64 + 2, 32 + 3, 1, 0x300)
    assert machine.pixel(2, 3) == 1
    assert machine.framebuffer().sum() == 1


def test_pixels_stay_binary(machine):
    for _ in range(3):
        draw_sprite(machine, 5, 5, 5, FONT_ADDRESS + 8 * 5)
    assert set(machine.display) <= {0, 1}


def test_zero_height_draws_nothing(machine):
    assert draw_sprite(machine, 0, 0, 0, FONT_ADDRESS) is False
    assert not any(machine.display)
