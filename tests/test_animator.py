"""Tests for the animator: oscillators, frame gate and the render pass."""

import math

import numpy as np
import pytest

from hemiwire.config import RESOLUTIONS, SceneParams
from hemiwire.core.angles import to_radians
from hemiwire.core.animator import (
    AnimationState,
    Animator,
    FrameGate,
    LineCommand,
    PolygonCommand,
    create_animator,
    js_round,
    opacity_at,
    resolution_index_at,
)
from hemiwire.core.camera import OrthographicCamera
from hemiwire.core.matrix import Matrix4
from hemiwire.core.mesh import POINTS_PER_CELL, build_hemisphere
from hemiwire.core.noise import NoiseSampler, ValueNoise
from hemiwire.core.palette import Palette, build_palette
from hemiwire.core.vector import Vector


def make_animator(spec, params, sampler):
    mesh = build_hemisphere(spec, params.radius, sampler, params.resolutions[0])
    camera = OrthographicCamera(
        Vector((0, 0, 0)), Vector.zeroes(), Vector((0, 1, 0)), 600, 600, params.camera_zoom
    )
    state = AnimationState(dt=params.time_step, perspective=Matrix4.identity().rotate_x(to_radians(120)))
    return Animator(mesh, camera, sampler, Palette(build_palette()), params, state)


class TestOscillators:

    def test_opacity_range(self):
        assert opacity_at(0.0) == pytest.approx(0.5)
        for t in np.linspace(-200, 200, 4001):
            assert 0.0 <= opacity_at(t) <= 1.0

    def test_resolution_index(self):
        assert resolution_index_at(0.0) == 1
        seen = {resolution_index_at(t) for t in np.linspace(0, 50, 2001)}
        assert seen == {0, 1}

    def test_js_round_rounds_half_up(self):
        assert js_round(0.5) == 1
        assert js_round(2.5) == 3
        assert js_round(-0.5) == 0
        assert js_round(1.49) == 1


class TestFrameGate:

    def test_skips_within_same_logical_frame(self):
        gate = FrameGate(30)
        assert gate.admit(100.0) is True
        assert gate.admit(100.01) is False
        assert gate.admit(100.0 + 1.0 / 30) is True

    def test_initial_tick_zero_is_skipped(self):
        assert FrameGate(30).admit(0.0) is False


class TestRenderPass:

    def test_frame_contents(self, small_spec, small_params, constant_noise):
        sampler = NoiseSampler(constant_noise(0.5), small_params.noise_range)
        animator = make_animator(small_spec, small_params, sampler)
        frame = animator.render()
        assert len(frame.lines) == len(animator.mesh.lines)
        assert len(frame.polygons) == len(animator.mesh.faces)
        # lines are drawn before faces
        assert all(isinstance(c, LineCommand) for c in frame.commands[:len(frame.lines)])
        assert all(isinstance(c, PolygonCommand) for c in frame.commands[len(frame.lines):])
        assert frame.t == 0.0
        assert frame.opacity == pytest.approx(0.5)
        assert frame.resolution == RESOLUTIONS[1]

    def test_clock_and_spin_advance(self, small_spec, small_params, constant_noise):
        sampler = NoiseSampler(constant_noise(0.5), small_params.noise_range)
        animator = make_animator(small_spec, small_params, sampler)
        before = animator.state.perspective
        animator.render()
        assert animator.state.t == pytest.approx(0.02)
        assert animator.state.perspective.isclose(before.rotate_z(0.002))
        animator.step(2)
        assert animator.state.t == pytest.approx(0.06)

    def test_line_fade_rule(self, small_spec, small_params, constant_noise):
        sampler = NoiseSampler(constant_noise(0.5), small_params.noise_range)
        animator = make_animator(small_spec, small_params, sampler)
        assert animator.mesh.fade_threshold == 14
        alphas = [c.alpha for c in animator.render().lines]
        faded = {15, 17, 18, 20}
        for k, alpha in enumerate(alphas):
            if k in faded:
                assert alpha == pytest.approx(0.5), k
            else:
                assert alpha == 1.0, k

    def test_line_endpoints_are_projected(self, small_spec, small_params, constant_noise):
        sampler = NoiseSampler(constant_noise(0.5), small_params.noise_range)
        animator = make_animator(small_spec, small_params, sampler)
        a, b = animator.mesh.lines[0]
        start = animator.mesh.points[a]
        frame = animator.render()
        expected = animator.camera.project(start.transform(animator.state.perspective))
        assert frame.lines[0].start == pytest.approx((expected.x, expected.y))
        assert frame.lines[0].color == "#aaaaaa"

    def test_array_pass_matches_point_by_point(self):
        animator = create_animator(seed=5)
        animator.step(3)
        points = list(animator.mesh.points)
        frame = animator.render()

        def projected(index):
            p = animator.project(points[index])
            return (p.x, p.y)

        for (a, b), command in zip(animator.mesh.lines, frame.lines):
            assert command.start == pytest.approx(projected(a))
            assert command.end == pytest.approx(projected(b))
        for face, command in zip(animator.mesh.faces, frame.polygons):
            for index, corner in zip(face, command.points):
                assert corner == pytest.approx(projected(index))

    def test_faded_lines_and_face_colours_match_point_rules(self):
        animator = create_animator(seed=5)
        animator.step(2)
        points = list(animator.mesh.points)
        opacity = opacity_at(animator.state.t)
        frame = animator.render()
        threshold = animator.mesh.fade_threshold
        for k, ((_, b), command) in enumerate(zip(animator.mesh.lines, frame.lines)):
            faded = k > threshold and points[b].z > 0 and k % 3 != 1
            assert command.alpha == (pytest.approx(opacity) if faded else 1.0)
        palette = animator.palette
        for face, command in zip(animator.mesh.faces, frame.polygons):
            min_z = min(100.0, *(points[i].z for i in face))
            ci = math.floor(min_z * len(palette))
            assert command.fill == palette[max(ci, 9)]
            assert command.stroke == palette[len(palette) - ci]

    def test_face_colours(self, small_spec, small_params, constant_noise):
        # heights of 0.5 map to palette index floor(0.5 * 32) = 16
        sampler = NoiseSampler(constant_noise(0.0), (0.0, 1.0))
        animator = make_animator(small_spec, small_params, sampler)
        palette = animator.palette
        for poly in animator.render().polygons:
            assert poly.fill == palette.colors[16]
            assert poly.stroke == palette.colors[32 - 16]
            assert poly.alpha == pytest.approx(0.5)
            assert len(poly.points) == 4

    def test_face_colour_floor(self, small_spec, small_params, constant_noise):
        # heights near 0.05 give index 1, floored to 9 for the fill only
        sampler = NoiseSampler(constant_noise(-0.9), (0.0, 1.0))
        animator = make_animator(small_spec, small_params, sampler)
        palette = animator.palette
        poly = animator.render().polygons[0]
        assert poly.fill == palette.colors[9]
        assert poly.stroke == palette.colors[31]

    def test_redeform_resamples_surface_points(self, small_spec, small_params):
        noise = ValueNoise(8)
        sampler = NoiseSampler(noise, small_params.noise_range)
        animator = make_animator(small_spec, small_params, sampler)
        copies = list(animator.mesh.points[4:8])
        x, y = animator.mesh.points[0].x, animator.mesh.points[0].y
        frame = animator.render()
        assert animator.mesh.points[0].z == pytest.approx(sampler.sample(x, y, 0.0, frame.resolution))
        assert (animator.mesh.points[0].x, animator.mesh.points[0].y) == (x, y)
        assert animator.mesh.points[4:8] == copies

    def test_redeform_covers_points_below_equator(self, constant_noise):
        params = SceneParams()
        sampler = NoiseSampler(constant_noise(0.5), params.noise_range)
        animator = create_animator(params, seed=3)
        animator.sampler = sampler
        animator.render()
        points = animator.mesh.points
        for i in range(0, len(points), POINTS_PER_CELL):
            for j in range(4):
                assert points[i + j].z == pytest.approx(2.25)


class TestTick:

    def test_tick_gates_render(self, small_spec, small_params, constant_noise):
        sampler = NoiseSampler(constant_noise(0.5), small_params.noise_range)
        animator = make_animator(small_spec, small_params, sampler)
        assert animator.tick(1000.0) is not None
        t_after = animator.state.t
        assert animator.tick(1000.0) is None
        assert animator.state.t == t_after
        assert animator.state.prev_tick == js_round(30 * 1000.0)


class TestCreateAnimator:

    def test_default_scene(self):
        animator = create_animator(seed=7)
        assert len(animator.mesh.points) == 2960
        assert len(animator.mesh.faces) == 370
        assert animator.camera.width == 600
        assert animator.camera.zoom == pytest.approx(0.04)
        assert animator.state.perspective.isclose(Matrix4.rotation_x(math.radians(120)))
        assert animator.state.t == 0.0
        assert animator.state.dt == pytest.approx(0.02)

    def test_seed_makes_scene_reproducible(self):
        a = create_animator(seed=7)
        b = create_animator(seed=7)
        assert a.mesh.points == b.mesh.points
