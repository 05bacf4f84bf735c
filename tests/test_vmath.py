import math

import pytest

from bez.vmath import (
    IVec2,
    IVec3,
    IVec4,
    Mat4,
    Vec2,
    Vec3,
    Vec4,
    clampf,
    deg2rad,
    ilerpf,
    lerpf,
    rad2deg,
    randf,
    remapf,
    smoothlerpf,
)


def _mat_approx(a, b):
    return all(ra == pytest.approx(rb, abs=1e-9) for ra, rb in zip(a.data, b.data))


def test_randf_in_unit_interval():
    values = [randf() for _ in range(200)]
    assert all(0.0 <= v <= 1.0 for v in values)


def test_clampf():
    assert clampf(5.0, 1.0, 3.0) == 3.0
    assert clampf(-5.0, 1.0, 3.0) == 1.0
    assert clampf(2.5, 1.0, 3.0) == 2.5


def test_lerp_endpoints_and_inverse():
    assert lerpf(2.0, 10.0, 0.0) == 2.0
    assert lerpf(2.0, 10.0, 1.0) == 10.0
    t = ilerpf(2.0, 10.0, lerpf(2.0, 10.0, 0.3))
    assert t == pytest.approx(0.3)


def test_ilerp_empty_range_is_zero():
    assert ilerpf(4.0, 4.0, 7.0) == 0.0


def test_smoothlerp_endpoints_and_symmetry():
    assert smoothlerpf(1.0, 5.0, 0.0) == 1.0
    assert smoothlerpf(1.0, 5.0, 1.0) == 5.0
    assert smoothlerpf(1.0, 5.0, 0.5) == pytest.approx(lerpf(1.0, 5.0, 0.5))


def test_remap_endpoints():
    assert remapf(0.0, 10.0, 100.0, 200.0, 0.0) == 100.0
    assert remapf(0.0, 10.0, 100.0, 200.0, 10.0) == 200.0


def test_angle_conversions():
    assert rad2deg(math.pi) == pytest.approx(180.0)
    assert deg2rad(rad2deg(1.234)) == pytest.approx(1.234)


def test_vec2_arithmetic_round_trip():
    p, q = Vec2(1.5, -2.0), Vec2(3.0, 4.0)
    r = (p + q) - q
    assert r.x == pytest.approx(p.x) and r.y == pytest.approx(p.y)
    s = (p * 4.0) / 4.0
    assert s.x == pytest.approx(p.x) and s.y == pytest.approx(p.y)


def test_vec_div_by_zero_gives_zero_vector():
    assert Vec2(3.0, 4.0) / 0.0 == Vec2(0.0, 0.0)
    assert Vec3(1.0, 2.0, 3.0) / 0.0 == Vec3(0.0, 0.0, 0.0)
    assert Vec4(1.0, 2.0, 3.0, 4.0) / 0.0 == Vec4(0.0, 0.0, 0.0, 0.0)


def test_norm_has_unit_length_and_zero_stays_zero():
    assert Vec2(3.0, 7.0).norm().mag() == pytest.approx(1.0)
    assert Vec3(3.0, -7.0, 2.0).norm().mag() == pytest.approx(1.0)
    assert Vec4(1.0, 2.0, -3.0, 4.0).norm().mag() == pytest.approx(1.0)
    assert Vec2(0.0, 0.0).norm() == Vec2(0.0, 0.0)


def test_vec2_cross_is_perpendicular_to_difference():
    p, q = Vec2(5.0, 1.0), Vec2(2.0, -3.0)
    c = p.cross(q)
    assert c.dot(p - q) == pytest.approx(0.0)
    assert c.mag() == pytest.approx(p.dist(q))


def test_vec2_lerp_and_distances():
    p, q = Vec2(0.0, 0.0), Vec2(6.0, 8.0)
    assert p.lerp(q, 0.0) == p
    assert p.lerp(q, 1.0) == q
    assert p.sqdist(q) == pytest.approx(p.dist(q) ** 2)
    assert q.sqmag() == pytest.approx(q.mag() ** 2)


def test_vec2_from_rad_round_trip():
    v = Vec2.from_rad(0.8)
    assert v.mag() == pytest.approx(1.0)
    assert v.rads() == pytest.approx(0.8)


def test_vec_uni_and_prod():
    assert Vec2.uni(2.0) == Vec2(2.0, 2.0)
    assert Vec3.uni(1.5).prod(Vec3(2.0, 4.0, 6.0)) == Vec3(3.0, 6.0, 9.0)
    assert Vec4.uni(-1.0).prod(Vec4(1.0, 2.0, 3.0, 4.0)) == Vec4(-1.0, -2.0, -3.0, -4.0)


def test_vec_rand_components_in_unit_interval():
    for v in (Vec2.rand(), Vec3.rand(), Vec4.rand()):
        comps = [getattr(v, name) for name in ("x", "y", "z", "w") if hasattr(v, name)]
        assert all(0.0 <= c <= 1.0 for c in comps)


def test_vec3_cross_is_orthogonal():
    p, q = Vec3(1.0, 2.0, 3.0), Vec3(-4.0, 0.5, 2.0)
    c = p.cross(q)
    assert c.dot(p) == pytest.approx(0.0)
    assert c.dot(q) == pytest.approx(0.0)
    assert q.cross(p) == c * -1.0


def test_vec3_and_vec4_lerp_distances():
    p, q = Vec3(1.0, 1.0, 1.0), Vec3(4.0, 5.0, 1.0)
    assert p.lerp(q, 1.0) == q
    assert p.sqdist(q) == pytest.approx(p.dist(q) ** 2)
    a, b = Vec4(1.0, 0.0, 0.0, 0.0), Vec4(0.0, 1.0, 0.0, 0.0)
    assert a.lerp(b, 0.0) == a
    assert a.dot(b) == 0.0
    assert a.sqdist(b) == pytest.approx(a.dist(b) ** 2)


def test_int_float_conversions_truncate():
    assert Vec2(3.9, -2.7).to_ivec() == IVec2(3, -2)
    assert IVec3(1, -2, 3).to_vec().to_ivec() == IVec3(1, -2, 3)
    assert IVec4(4, 5, -6, 7).to_vec() == Vec4(4.0, 5.0, -6.0, 7.0)
    assert IVec2(8, 9).to_vec().to_ivec() == IVec2(8, 9)


def test_mat4_rejects_bad_shape():
    with pytest.raises(ValueError):
        Mat4(((1.0, 2.0),))


def test_identity_is_neutral():
    m = Mat4.model(Vec3(1.0, 2.0, 3.0), Vec3(2.0, 2.0, 2.0), Vec3(0.0, 1.0, 0.0), 0.4)
    assert _mat_approx(Mat4.identity() @ m, m)
    assert _mat_approx(m @ Mat4.identity(), m)
    assert Mat4.zero() @ m == Mat4.zero()


def test_translate_moves_points():
    m = Mat4.identity().translate(Vec3(5.0, -1.0, 2.0))
    v = Vec4(1.0, 1.0, 1.0, 1.0).mult_mat4(m)
    assert (v.x, v.y, v.z, v.w) == pytest.approx((6.0, 0.0, 3.0, 1.0), abs=1e-9)
    direction = Vec4(1.0, 1.0, 1.0, 0.0).mult_mat4(m)
    assert (direction.x, direction.y, direction.z, direction.w) == pytest.approx(
        (1.0, 1.0, 1.0, 0.0), abs=1e-9
    )


def test_rot_zero_is_identity_and_rotation_about_z():
    r = Mat4.identity().rot(0.0, Vec3(0.0, 0.0, 1.0))
    flat = [c for row in r.data for c in row]
    expected_flat = [1.0 if i == j else 0.0 for i in range(4) for j in range(4)]
    assert flat == pytest.approx(expected_flat, abs=1e-9)
    angle = 0.7
    m = Mat4.identity().rot(angle, Vec3(0.0, 0.0, 3.0))
    v = Vec4(1.0, 0.0, 0.0, 0.0).mult_mat4(m)
    assert (v.x, v.y, v.z, v.w) == pytest.approx(
        (math.cos(angle), math.sin(angle), 0.0, 0.0), abs=1e-6
    )


def test_rot_preserves_length_and_translation():
    m = Mat4.identity().translate(Vec3(1.0, 2.0, 3.0)).rot(1.1, Vec3(1.0, 1.0, 0.0))
    assert m[3][:3] == pytest.approx((1.0, 2.0, 3.0))
    v = Vec4(2.0, -1.0, 0.5, 0.0)
    assert v.mult_mat4(m).mag() == pytest.approx(v.mag())


def test_perspective_variants():
    rh = Mat4.perspective_rh(1.0, 1.5, 0.1, 100.0)
    lh = Mat4.perspective_lh(1.0, 1.5, 0.1, 100.0)
    assert Mat4.perspective(1.0, 1.5, 0.1, 100.0) == rh
    assert lh[3][2] == pytest.approx(-rh[3][2])
    assert rh[0][0] * 1.5 == pytest.approx(rh[1][1])


@pytest.mark.parametrize("builder", [Mat4.look_at_rh, Mat4.look_at_lh])
def test_look_at_maps_eye_to_origin(builder):
    eye = Vec3(3.0, 4.0, 5.0)
    m = builder(eye, Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0))
    v = Vec4(eye.x, eye.y, eye.z, 1.0).mult_mat4(m)
    assert (v.x, v.y, v.z, v.w) == pytest.approx((0.0, 0.0, 0.0, 1.0), abs=1e-9)
    cols = [Vec3(m[0][j], m[1][j], m[2][j]) for j in range(3)]
    for c in cols:
        assert c.mag() == pytest.approx(1.0)
    assert cols[0].dot(cols[1]) == pytest.approx(0.0, abs=1e-9)


def test_look_at_default_is_right_handed():
    args = (Vec3(1.0, 2.0, 3.0), Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0))
    assert Mat4.look_at(*args) == Mat4.look_at_rh(*args)


def test_ortho_maps_corners_to_clip_space():
    m = Mat4.ortho(10.0, 50.0, -20.0, 80.0)
    low = Vec4(10.0, -20.0, 0.0, 1.0).mult_mat4(m)
    high = Vec4(50.0, 80.0, 0.0, 1.0).mult_mat4(m)
    assert (low.x, low.y, low.z, low.w) == pytest.approx((-1.0, -1.0, 0.0, 1.0), abs=1e-9)
    assert (high.x, high.y, high.z, high.w) == pytest.approx((1.0, 1.0, 0.0, 1.0), abs=1e-9)


def test_model_combines_scale_and_translation():
    m = Mat4.model(Vec3(7.0, 8.0, 9.0), Vec3(2.0, 3.0, 4.0), Vec3(0.0, 0.0, 1.0), 0.0)
    v = Vec4(1.0, 1.0, 1.0, 1.0).mult_mat4(m)
    assert (v.x, v.y, v.z, v.w) == pytest.approx((9.0, 11.0, 13.0, 1.0), abs=1e-9)