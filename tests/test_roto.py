from bez.engine import Action, Input, Key, MouseButton
from bez.plot import Px, Texture
from bez.roto import Mask, Roto, Spline
from bez.vmath import Vec2


def _press(controls, key):
    controls.handle_key(key, Action.PRESS, 0)


def test_defaults():
    roto = Roto()
    assert roto.masks == []
    assert roto.selected_point == 0
    assert roto.overlay is True
    assert roto.isactive is True


def test_push_spline_creates_mask_and_selects_anchor():
    roto = Roto()
    p = Vec2(3, 4)
    spline = roto.push_spline(p)
    assert spline == Spline(p, p, p)
    assert len(roto.masks) == 1
    assert roto.masks[0].splines == [spline]
    assert roto.selected_point == 1
    assert roto.justcreated is True


def test_push_spline_after_closed_mask_starts_new_mask():
    roto = Roto()
    roto.push_spline(Vec2(0, 0))
    roto.masks[0].isclosed = True
    roto.push_spline(Vec2(1, 1))
    assert len(roto.masks) == 2
    assert roto.selected_mask == 1


def test_push_spline_nearest_without_masks_appends():
    roto = Roto()
    spline = roto.push_spline_nearest(Vec2(2, 2))
    assert roto.masks[0].splines == [spline]


def test_push_spline_nearest_inserts_between_closest_pair():
    roto = Roto()
    for x in (0, 10, 100):
        roto.push_spline(Vec2(x, 0))
    p = Vec2(5, 1)
    roto.push_spline_nearest(p)
    points = [s.p for s in roto.masks[0].splines]
    assert points == [Vec2(0, 0), p, Vec2(10, 0), Vec2(100, 0)]
    assert roto.selected_mask == 0
    assert roto.selected_point == 4


def test_select_finds_exact_point():
    roto = Roto()
    roto.push_spline(Vec2(1, 2))
    roto.push_spline(Vec2(5, 6))
    roto.selected_point = 0
    roto.select(Vec2(5, 6))
    assert roto.selected_point == 4
    assert roto.selected_mask == 0


def test_select_keeps_existing_selection():
    roto = Roto()
    roto.push_spline(Vec2(1, 2))
    roto.push_spline(Vec2(5, 6))
    before = roto.selected_point
    roto.select(Vec2(1, 2))
    assert roto.selected_point == before


def test_r_key_resets_to_one_empty_mask():
    roto = Roto()
    roto.push_spline(Vec2(1, 1))
    controls = Input()
    _press(controls, Key.R)
    roto.handle_input(Vec2(0, 0), controls)
    assert len(roto.masks) == 1
    assert roto.masks[0].splines == []


def test_q_key_toggles_overlay():
    roto = Roto()
    controls = Input()
    _press(controls, Key.Q)
    roto.handle_input(Vec2(0, 0), controls)
    assert roto.overlay is False


def test_backspace_pops_last_point():
    roto = Roto()
    first = roto.push_spline(Vec2(1, 1))
    roto.push_spline(Vec2(2, 2))
    controls = Input()
    _press(controls, Key.BACKSPACE)
    roto.handle_input(Vec2(0, 0), controls)
    assert roto.masks[0].splines == [first]


def test_x_key_removes_mask_and_keeps_one():
    roto = Roto()
    roto.push_spline(Vec2(1, 1))
    controls = Input()
    _press(controls, Key.X)
    roto.handle_input(Vec2(0, 0), controls)
    assert len(roto.masks) == 1
    assert roto.masks[0].splines == []


def test_x_key_on_empty_mask_also_drops_previous():
    roto = Roto()
    roto.push_spline(Vec2(1, 1))
    first = roto.masks[0]
    first.isclosed = True
    roto.push_spline(Vec2(2, 2))
    roto.masks.append(Mask())
    controls = Input()
    _press(controls, Key.X)
    roto.handle_input(Vec2(0, 0), controls)
    assert len(roto.masks) == 1
    assert roto.masks[0] is first


def test_mouse_up_clears_selection():
    roto = Roto()
    roto.push_spline(Vec2(1, 1))
    roto.handle_input(Vec2(0, 0), Input())
    assert roto.selected_point == 0
    assert roto.justcreated is False


def test_edit_click_pushes_point():
    roto = Roto()
    controls = Input()
    controls.handle_mouse_button(MouseButton.LEFT, True)
    roto.edit(Vec2(7, 8), controls)
    assert roto.masks[0].splines[0].p == Vec2(7, 8)


def test_edit_after_create_spreads_symmetric_handles():
    roto = Roto()
    spline = roto.push_spline(Vec2(10, 10))
    m = Vec2(14, 13)
    roto.edit(m, Input())
    assert spline.c1 == m
    assert (spline.c0 + spline.c1) * 0.5 == spline.p


def test_edit_moves_anchor_with_its_handles():
    roto = Roto()
    spline = roto.push_spline(Vec2(10, 10))
    spline.c0 = Vec2(8, 10)
    spline.c1 = Vec2(12, 11)
    offsets = (spline.c0 - spline.p, spline.c1 - spline.p)
    roto.justcreated = False
    roto.selected_point = 1
    roto.edit(Vec2(20, 15), Input())
    assert spline.p == Vec2(20, 15)
    assert (spline.c0 - spline.p, spline.c1 - spline.p) == offsets


def test_edit_handle_mirrors_partner_from_old_position():
    roto = Roto()
    spline = roto.push_spline(Vec2(10, 10))
    old_c0 = Vec2(7, 10)
    spline.c0 = old_c0
    roto.justcreated = False
    roto.selected_point = 2
    roto.edit(Vec2(5, 5), Input())
    assert spline.c0 == Vec2(5, 5)
    assert spline.c1 + old_c0 == spline.p * 2


def test_edit_control_moves_handle_alone():
    roto = Roto()
    spline = roto.push_spline(Vec2(10, 10))
    roto.justcreated = False
    roto.selected_point = 2
    controls = Input()
    controls.handle_key(Key.LEFT_CONTROL, Action.PRESS, 0)
    roto.edit(Vec2(3, 4), controls)
    assert spline.c0 == Vec2(3, 4)
    assert spline.c1 == Vec2(10, 10)


def test_edit_selecting_first_point_closes_mask():
    roto = Roto()
    roto.push_spline(Vec2(1, 1))
    roto.push_spline(Vec2(9, 9))
    roto.justcreated = False
    roto.selected_point = 1
    roto.edit(Vec2(1, 1), Input())
    assert roto.masks[0].isclosed is True
    assert roto.selected_point == 0


def test_edit_c_key_deletes_selected_anchor():
    roto = Roto()
    first = roto.push_spline(Vec2(1, 1))
    second = roto.push_spline(Vec2(9, 9))
    roto.justcreated = False
    controls = Input()
    _press(controls, Key.C)
    roto.edit(second.p, controls)
    assert roto.masks[0].splines == [first]
    assert roto.selected_point == 0


def test_d_key_deactivates_editor():
    roto = Roto()
    controls = Input()
    _press(controls, Key.D)
    controls.handle_mouse_button(MouseButton.LEFT, True)
    roto.update(Texture(20, 20), Vec2(5, 5), controls)
    assert roto.isactive is False
    assert roto.masks == []


def test_plot_draws_blue_curve():
    roto = Roto()
    roto.push_spline(Vec2(5, 5))
    roto.push_spline(Vec2(30, 25))
    texture = Texture(40, 40)
    roto.plot(texture)
    assert sum(1 for px in texture.pixels if px.b > 0) > 0


def test_plot_overlay_marks_points_green():
    roto = Roto()
    spline = roto.push_spline(Vec2(10, 10))
    spline.c0 = Vec2(5, 5)
    spline.c1 = Vec2(15, 15)
    texture = Texture(20, 20)
    roto.plot_overlay(texture)
    green = Px(0, 255, 0, 255)
    assert [texture[10, 10], texture[5, 5], texture[15, 15]] == [green] * 3