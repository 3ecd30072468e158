import math

import pytest

from src.models import flexure
from src.models.errors import ErrorKind
from src.models.flexure import calculate_section_design, compute_alpha_max
from src.models.section import FlangedSection, RectangularSection


@pytest.fixture
def standard_section():
    return RectangularSection(b=300, h=500, fc=25, fy=420, cover=40)


@pytest.fixture
def tee():
    return FlangedSection(bf=600, bw=300, tf=80, h=900, fc=25, fy=420, cover=60)


def _singly_area(M_Nmm, b, d, fc, fy):
    coeff = M_Nmm / (0.9 * 0.85 * fc * b * d ** 2)
    alpha = 1 - math.sqrt(1 - 2 * coeff)
    return M_Nmm / (0.9 * (1 - 0.5 * alpha) * d * fy)


class TestRectangular:
    def test_reference_scenario_is_singly_reinforced(self, standard_section):
        res = calculate_section_design(standard_section, 150, draft=True)
        draft = res["draft"]

        assert res["status_code"] == "ok"
        assert res.compression is None
        assert "Top Reinforcement" not in res["result"]
        assert draft["Depth of Reinforcement"] == 460
        assert draft["Coefficients"]["Area"] == pytest.approx(1.5e8 / (0.9 * 0.85 * 25 * 300 * 460 ** 2))
        assert draft["Coefficients"]["Area"] < 0.5
        assert draft["Minimum Reinforcement Area"] == pytest.approx(295.714, rel=1e-4)
        assert draft["Reinforcement Type"] == "Tension"
        assert draft["Top Reinforcement Area"] is None

    def test_reference_scenario_area(self, standard_section):
        res = calculate_section_design(standard_section, 150)
        expected = _singly_area(1.5e8, 300, 460, 25, 420)
        assert res.tension.area == pytest.approx(expected)
        assert res.tension.area == pytest.approx(923.8, rel=1e-3)
        assert res["result"]["unit"] == "mm2"
        assert "bars" not in res["result"]["Bottom Reinforcement"]

    def test_small_moment_governed_by_minimum(self, standard_section):
        res = calculate_section_design(standard_section, 20)
        As_min = (0.9 / 420) * 300 * 460
        assert res.status == "OK (Min Steel)"
        assert res.tension.area == pytest.approx(As_min)

    def test_alpha_max_depends_on_fy_only(self):
        assert compute_alpha_max(420) == pytest.approx(0.255)
        assert compute_alpha_max(280) == pytest.approx(267.75 / 910)

    def test_doubly_reinforced(self, standard_section):
        res = calculate_section_design(standard_section, 300, draft=True)
        q = res.quantities
        assert res.status_code == "ok"
        assert q.alpha >= q.alpha_max
        assert res.compression is not None
        assert res.compression.area > 0
        assert res["draft"]["Reinforcement Type"] == "Tension + Compression"
        assert "Top Reinforcement" in res["result"]

        singly_term = q.M_max / (0.9 * q.gama * q.d * 420)
        assert q.gama == pytest.approx(1 - 0.5 * q.alpha_max)
        assert res.tension.area > singly_term
        assert res.tension.area == pytest.approx(singly_term + res.compression.area * q.fs_comp / 420)

    def test_doubly_reinforced_values(self, standard_section):
        res = calculate_section_design(standard_section, 300)
        q = res.quantities
        d = 460
        alpha_max = 0.255
        M_max = 0.9 * 0.85 * 25 * alpha_max * (1 - 0.5 * alpha_max) * 300 * d ** 2
        y_max = d * alpha_max
        fs = min(630 * (y_max - 0.85 * 40) / y_max, 420)

        assert q.y_max == pytest.approx(y_max)
        assert q.M_max == pytest.approx(M_max)
        assert q.M_comp == pytest.approx(3e8 - M_max)
        assert q.fs_comp == pytest.approx(fs)
        assert res.compression.area == pytest.approx((3e8 - M_max) / (0.9 * fs * (d - 40)))

    def test_compression_steel_stress_below_yield(self):
        section = RectangularSection(300, 500, 25, 420, 80)
        res = calculate_section_design(section, 230)
        q = res.quantities
        assert res.compression is not None
        assert q.fs_comp < 420
        assert q.fs_comp == pytest.approx(630 * (q.y_max - 0.85 * 80) / q.y_max)

    def test_over_stressed_section(self, standard_section):
        res = calculate_section_design(standard_section, 700)
        assert res.status_code == "error"
        assert res.error_kind is ErrorKind.OVER_STRESSED
        assert res.http_status == 422
        assert res["result"] is None
        assert res.tension is None
        assert res.quantities.resistance_coeff > 0.5
        assert res.quantities.alpha is None
        assert res.quantities.As_tension is None

    def test_non_compliant_section(self, standard_section):
        res = calculate_section_design(standard_section, 500, bar_diameter=20)
        assert res.status_code == "error"
        assert res.error_kind is ErrorKind.NON_COMPLIANT
        assert res["result"] is None
        assert "draft" not in res.to_dict()
        assert res.quantities.As_tension > res.quantities.As_max

    def test_non_compliant_reports_clamped_tension_area(self):
        res = calculate_section_design(RectangularSection(300, 500, 2, 420, 40), 10)
        q = res.quantities
        assert res.error_kind is ErrorKind.NON_COMPLIANT
        assert q.As_tension == pytest.approx(q.As_min)
        assert q.As_tension > q.As_max

    def test_moment_at_ductility_limit_needs_no_compression_steel(self, standard_section, monkeypatch):
        coeff = 1.5e8 / (0.9 * 0.85 * 25 * 300 * 460 ** 2)
        alpha = 1 - math.sqrt(1 - 2 * coeff)
        monkeypatch.setattr(flexure, "compute_alpha_max", lambda fy: alpha)

        res = calculate_section_design(standard_section, 150, bar_diameter=16)
        assert res.ok
        assert res.compression is None
        assert "Top Reinforcement" not in res["result"]
        assert res.quantities.reinforcement_type == "Tension"
        assert res.quantities.As_compression is None
        assert res.tension.area == pytest.approx(_singly_area(1.5e8, 300, 460, 25, 420))

    def test_bar_layout(self, standard_section):
        res = calculate_section_design(standard_section, 150, bar_diameter=16)
        bars = res["result"]["Bottom Reinforcement"]["bars"]
        assert bars["number"] == 5
        assert bars["diameter"] == 16
        assert bars["area"] == pytest.approx(5 * math.pi * 8 ** 2)

    def test_bar_layout_on_compression_steel(self, standard_section):
        res = calculate_section_design(standard_section, 300, bar_diameter=20)
        top = res["result"]["Top Reinforcement"]
        assert top["bars"]["number"] >= 2
        assert top["bars"]["area"] >= top["area"]

    def test_idempotent(self, standard_section):
        r1 = calculate_section_design(standard_section, 300, bar_diameter=20, draft=True)
        r2 = calculate_section_design(standard_section, 300, bar_diameter=20, draft=True)
        assert r1.to_dict() == r2.to_dict()

    def test_tension_area_increases_with_moment(self, standard_section):
        areas = [calculate_section_design(standard_section, mu).tension.area for mu in range(100, 401, 25)]
        assert all(a2 > a1 for a1, a2 in zip(areas, areas[1:]))

    @pytest.mark.parametrize("mu", [20, 80, 150, 250, 300, 380])
    def test_design_area_within_limits(self, standard_section, mu):
        res = calculate_section_design(standard_section, mu)
        q = res.quantities
        assert res.ok
        assert q.As_min <= res.tension.area <= q.As_max

    def test_draft_hidden_by_default(self, standard_section):
        res = calculate_section_design(standard_section, 150)
        assert "draft" not in res.to_dict()

    def test_default_cover(self):
        res = calculate_section_design(RectangularSection(300, 500, 25, 420), 150, draft=True)
        assert res["draft"]["Concrete Cover"] == pytest.approx(50.0)
        assert res["draft"]["Depth of Reinforcement"] == pytest.approx(450.0)

    @pytest.mark.parametrize("mu", [0, -150, float("nan"), 10 ** 400])
    def test_invalid_moment(self, standard_section, mu):
        res = calculate_section_design(standard_section, mu)
        assert res.error_kind is ErrorKind.INVALID_INPUT
        assert res.http_status == 400

    def test_invalid_bar_diameter(self, standard_section):
        res = calculate_section_design(standard_section, 150, bar_diameter=0)
        assert res.error_kind is ErrorKind.INVALID_INPUT

    def test_unexpected_error_is_reported_as_internal(self, standard_section, monkeypatch):
        def broken(*args, **kwargs):
            raise ZeroDivisionError("float division by zero")

        monkeypatch.setattr(flexure, "resolve_geometry", broken)
        res = calculate_section_design(standard_section, 150)
        assert res.error_kind is ErrorKind.INTERNAL
        assert res.http_status == 500
        assert res.status == "Error: Unexpected computation error."


class TestFlanged:
    def test_negative_moment_matches_web_rectangle(self):
        tee = FlangedSection(bf=900, bw=300, tf=120, h=500, fc=25, fy=420, cover=40)
        res = calculate_section_design(tee, 150, negative_moment=True, draft=True)
        rect = calculate_section_design(RectangularSection(300, 500, 25, 420, 40), 150)
        draft = res["draft"]

        assert res.ok
        assert draft["Equivalent Width"] == 300
        assert draft["Neutral Axis In Flange"] is False
        assert draft["Flange Overhang Steel"] == 0.0
        assert res.tension.area == pytest.approx(rect.tension.area)

    def test_negative_moment_limits(self):
        tee = FlangedSection(bf=900, bw=300, tf=120, h=500, fc=25, fy=420, cover=40)
        res = calculate_section_design(tee, 150, negative_moment=True)
        q = res.quantities
        assert q.As_min == pytest.approx((0.9 / 420) * 300 * 460)
        assert q.As_max == pytest.approx(0.75 * (455 / 1050) * (25 / 420) * 900 * 460)

    def test_in_flange_adds_overhang_steel(self, tee):
        res = calculate_section_design(tee, 500, draft=True)
        q = res.quantities
        overhang_steel = 0.85 * (25 / 420) * 80 * (600 - 300)
        overhang_moment = 0.9 * 0.85 * 25 * 80 * (600 - 300) * (840 - 40)
        web_area = _singly_area(5e8 - overhang_moment, 600, 840, 25, 420)

        assert q.in_flange is True
        assert q.b_eq == 600
        assert q.M_eq == pytest.approx(5e8 - overhang_moment)
        assert q.overhang_steel == pytest.approx(overhang_steel)
        assert res.tension.area == pytest.approx(web_area + overhang_steel)

    def test_in_flange_with_overhang_carrying_whole_moment(self, tee):
        res = calculate_section_design(tee, 200)
        q = res.quantities
        overhang_steel = 0.85 * (25 / 420) * 80 * (600 - 300)
        assert res.ok
        assert q.M_eq < 0
        assert q.resistance_coeff == 0.0
        assert res.tension.area == pytest.approx(max(overhang_steel, q.As_min))

    def test_in_flange_doubly_reinforced_adds_overhang_steel(self):
        tee = FlangedSection(bf=320, bw=300, tf=300, h=500, fc=25, fy=420, cover=40)
        res = calculate_section_design(tee, 400, draft=True)
        q = res.quantities
        overhang_steel = 0.85 * (25 / 420) * 300 * (320 - 300)
        web_tension = q.M_max / (0.9 * q.gama * 460 * 420)

        assert res.ok
        assert q.in_flange is True
        assert q.b_eq == 320
        assert q.reinforcement_type == "Tension + Compression"
        assert res.compression is not None
        assert res.compression.area > 0
        assert q.overhang_steel == pytest.approx(overhang_steel)
        assert res.tension.area == pytest.approx(
            web_tension + res.compression.area * q.fs_comp / 420 + overhang_steel
        )
        assert res.tension.area == pytest.approx(2683.36, rel=1e-4)

    def test_below_flange_uses_web_without_overhang(self, tee):
        res = calculate_section_design(tee, 800, draft=True)
        q = res.quantities
        assert q.in_flange is False
        assert q.b_eq == 300
        assert q.overhang_steel == 0.0
        assert res.tension.area == pytest.approx(_singly_area(8e8, 300, 840, 25, 420))
        assert res["draft"]["Flange Capacity"] == pytest.approx(7.344e8)

    def test_flanged_over_stressed(self):
        tee = FlangedSection(bf=900, bw=300, tf=120, h=500, fc=25, fy=420, cover=40)
        res = calculate_section_design(tee, 900)
        assert res.error_kind is ErrorKind.OVER_STRESSED
