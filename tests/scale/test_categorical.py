from __future__ import annotations

import pytest

from pnut.scale.categorical import BandScale, OrdinalScale, PointScale, band_layout


def test_band_scale_without_padding() -> None:
    scale = BandScale(domain=("a", "b", "c", "d"), range=(0, 100))
    assert [scale(v) for v in "abcd"] == pytest.approx([0, 25, 50, 75])
    assert scale.bandwidth() == pytest.approx(25)
    assert scale.step() == pytest.approx(25)


def test_band_scale_single_value() -> None:
    scale = BandScale(domain=(1,), range=(0, 1))
    assert scale(1) == 0
    assert scale.bandwidth() == 1


def test_band_scale_padding() -> None:
    scale = BandScale(domain=("a", "b", "c"), range=(0, 120)).with_padding(0.1)
    step = 120 / 3.1
    assert scale.step() == pytest.approx(step)
    assert scale.bandwidth() == pytest.approx(step * 0.9)
    assert scale("a") == pytest.approx(step * 0.1)
    assert scale("c") - scale("b") == pytest.approx(step)


def test_band_scale_align() -> None:
    start = BandScale(domain=("a", "b"), range=(0, 100), padding_outer=0.5).with_align(0)
    end = start.with_align(1)
    assert start("a") == pytest.approx(0)
    assert end("b") + end.bandwidth() == pytest.approx(100)


def test_band_scale_rounding_is_half_up() -> None:
    scale = BandScale(domain=("a", "b", "c"), range=(0, 100)).with_round()
    assert scale.step() == 33
    assert scale("a") == 1
    assert scale.bandwidth() == 33


def test_band_scale_reversed_range() -> None:
    scale = BandScale(domain=("a", "b"), range=(100, 0))
    assert scale("a") == pytest.approx(50)
    assert scale("b") == pytest.approx(0)


def test_band_scale_unknown_values() -> None:
    scale = BandScale(domain=("a",), range=(0, 1))
    assert scale("z") is None
    assert scale(None) is None
    assert scale(["unhashable"]) is None


def test_band_scale_dedupes_domain() -> None:
    scale = BandScale(domain=("a", "b", "a"), range=(0, 100))
    assert scale.domain == ("a", "b")
    assert scale.bandwidth() == pytest.approx(50)


def test_band_scale_rejects_out_of_range_padding() -> None:
    with pytest.raises(ValueError):
        BandScale(domain=("a",), padding_inner=1.5)
    with pytest.raises(ValueError):
        BandScale(domain=("a",)).with_align(-1)


def test_band_scales_compare_by_value() -> None:
    a = BandScale(domain=("a", "b"), range=(0, 10))
    assert a == BandScale(domain=["a", "b"], range=[0, 10])
    assert hash(a) == hash(a.with_range((0, 10)))


def test_band_layout_empty_domain() -> None:
    layout = band_layout(0, (0, 100), 0, 0, 0.5, False)
    assert layout.positions == ()
    assert layout.step == pytest.approx(100)


def test_point_scale() -> None:
    scale = PointScale(domain=("a", "b", "c"), range=(0, 100))
    assert [scale(v) for v in "abc"] == pytest.approx([0, 50, 100])
    assert scale.bandwidth() == 0
    assert scale.padding_inner == 1.0


def test_point_scale_padding_is_outer_only() -> None:
    scale = PointScale(domain=("a", "b", "c"), range=(0, 100)).with_padding(0.5)
    assert scale.padding_outer == 0.5
    assert scale.step() == pytest.approx(100 / 3)
    assert scale("a") == pytest.approx(100 / 6)
    with pytest.raises(TypeError):
        scale.with_padding_inner(0.2)


def test_ordinal_scale_cycles_range() -> None:
    scale = OrdinalScale(domain=("a", "b", "c"), range=("red", "blue"))
    assert [scale(v) for v in "abc"] == ["red", "blue", "red"]


def test_ordinal_scale_unknown() -> None:
    scale = OrdinalScale(domain=("a",), range=("red",))
    assert scale("z") is None
    assert scale.with_unknown("grey")("z") == "grey"
    assert OrdinalScale(domain=("a",))("a") is None


def test_ordinal_scale_builders() -> None:
    scale = OrdinalScale().with_domain(("x", "y")).with_range((1, 2))
    assert scale("y") == 2
