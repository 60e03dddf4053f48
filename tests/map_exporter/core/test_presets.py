from __future__ import annotations

import pytest

from map_exporter.core.presets import DEFAULT_PRESETS, PresetRegistry, Ratio, Resolution


def test_resolution_presets_scale_dimensions():
    one = DEFAULT_PRESETS.resolve_resolution(Resolution.ONE_X)
    two = DEFAULT_PRESETS.resolve_resolution("TWO_X")
    assert one.compute(300, 200) == (300, 200)
    assert two.compute(300, 200) == (600, 400)
    assert (one.scale, two.scale) == (1, 2)


def test_ratio_lookup_accepts_enum_and_string():
    assert DEFAULT_PRESETS.resolve_ratio(Ratio.CUSTOM) is DEFAULT_PRESETS.resolve_ratio("CUSTOM")


def test_hidden_ratio_not_listed_by_default():
    ids = [p.id for p in DEFAULT_PRESETS.ratios()]
    assert Ratio.CUSTOM not in ids
    assert Ratio.CUSTOM in [p.id for p in DEFAULT_PRESETS.ratios(include_hidden=True)]


def test_registry_rejects_unregistered_default():
    only_one_x = tuple(p for p in DEFAULT_PRESETS.resolutions() if p.id is Resolution.ONE_X)
    with pytest.raises(ValueError):
        PresetRegistry(resolutions=only_one_x, default_resolution=Resolution.TWO_X)
