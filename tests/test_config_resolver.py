"""
Tests for the typed config resolver: merge rules, clamping and fallbacks.
"""

from deckart.seeded.sdk import (
    DEFAULT_COLORS,
    DecorConfig,
    ShapeKind,
    resolve_config,
)


class TestMergeRules:
    """Nested objects merge per key, arrays and scalars replace."""

    def test_no_override_returns_defaults(self, default_config):
        assert resolve_config().model_dump() == default_config.model_dump()
        assert resolve_config(None, None).model_dump() == default_config.model_dump()

    def test_unknown_keys_ignored(self, default_config):
        cfg = resolve_config(None, {"bogus": 1, "also_bogus": {"x": 2}})
        assert cfg.model_dump() == default_config.model_dump()

    def test_nested_shapes_merge_per_leaf(self):
        cfg = resolve_config(None, {"shapes": {"circles": False}})
        assert cfg.shapes.circles is False
        assert cfg.shapes.triangles is True
        assert cfg.shapes.blobs is True

    def test_arrays_replace_wholesale(self):
        cfg = resolve_config(None, {"colors": ["#000000"]})
        assert cfg.colors == ["#000000"]

    def test_scalars_replace(self):
        cfg = resolve_config(None, {"background": "#ffffff", "z_index": 3})
        assert cfg.background == "#ffffff"
        assert cfg.z_index == 3

    def test_type_mismatch_on_object_field_falls_back(self):
        cfg = resolve_config(None, {"shapes": True})
        assert cfg.shapes.enabled() == list(ShapeKind)

    def test_camel_case_aliases(self):
        cfg = resolve_config(
            None,
            {"seedMode": "hash", "opacityRange": [0.3, 0.4], "avoidCenter": False, "zIndex": 2},
        )
        assert cfg.seed_mode == "hash"
        assert cfg.opacity_range == (0.3, 0.4)
        assert cfg.avoid_center is False
        assert cfg.z_index == 2

    def test_custom_defaults_are_kept(self):
        base = resolve_config(None, {"density": 50, "colors": ["#111111"]})
        cfg = resolve_config(base, {"layers": 5})
        assert cfg.density == 50
        assert cfg.colors == ["#111111"]
        assert cfg.layers == 5

    def test_dict_defaults(self):
        cfg = resolve_config({"density": 10}, {"layers": 2})
        assert cfg.density == 10
        assert cfg.layers == 2

    def test_config_override_uses_only_set_fields(self):
        base = resolve_config(None, {"density": 50})
        cfg = resolve_config(base, DecorConfig(layers=4))
        assert cfg.density == 50
        assert cfg.layers == 4

    def test_non_mapping_override_is_absorbed(self, default_config):
        assert resolve_config(None, "nonsense").model_dump() == default_config.model_dump()
        assert resolve_config(None, [1, 2, 3]).model_dump() == default_config.model_dump()

    def test_does_not_mutate_defaults(self):
        base = DecorConfig()
        resolve_config(base, {"shapes": {"lines": False}, "density": 3})
        assert base.shapes.lines is True
        assert base.density == 24

    def test_theme_by_hash_merges_recursively(self):
        base = resolve_config(None, {"theme_by_hash": {"#a": {"density": 5, "layers": 2}}})
        cfg = resolve_config(base, {"themeByHash": {"#a": {"density": 9}, "#b": {"layers": 1}}})
        assert cfg.theme_by_hash["#a"] == {"density": 9, "layers": 2}
        assert cfg.theme_by_hash["#b"] == {"layers": 1}


class TestClamping:
    """Numeric fields are clamped and sanitized, never rejected."""

    def test_density_upper_bound(self):
        assert resolve_config(None, {"density": 1000}).density == 400

    def test_density_lower_bound(self):
        assert resolve_config(None, {"density": -5}).density == 0

    def test_layers_lower_bound(self):
        assert resolve_config(None, {"layers": 0}).layers == 1

    def test_layers_upper_bound(self):
        assert resolve_config(None, {"layers": 20}).layers == 10

    def test_fractional_density_truncates(self):
        assert resolve_config(None, {"density": 12.9}).density == 12

    def test_ranges_reordered(self):
        cfg = resolve_config(None, {"opacity_range": [0.5, 0.1], "stroke_width_range": [4, 2]})
        assert cfg.opacity_range == (0.1, 0.5)
        assert cfg.stroke_width_range == (2.0, 4.0)

    def test_opacity_clamped_to_unit_interval(self):
        cfg = resolve_config(None, {"opacity_range": [-1, 3]})
        assert cfg.opacity_range == (0.0, 1.0)

    def test_center_radius_none_uses_default(self):
        assert resolve_config(None, {"center_avoid_radius": None}).center_avoid_radius == 0.22

    def test_position_normalised(self):
        assert resolve_config(None, {"position": "beforeend"}).position == "beforeend"
        assert resolve_config(None, {"position": "end"}).position == "beforeend"
        assert resolve_config(None, {"position": "sideways"}).position == "afterbegin"


class TestFallbacks:
    """Malformed values fall back to the default for that field only."""

    def test_non_numeric_density(self):
        cfg = resolve_config(None, {"density": "lots", "layers": 4})
        assert cfg.density == 24
        assert cfg.layers == 4

    def test_nan_density(self):
        assert resolve_config(None, {"density": float("nan")}).density == 24

    def test_empty_palette(self):
        assert resolve_config(None, {"colors": []}).colors == DEFAULT_COLORS

    def test_single_color_string(self):
        assert resolve_config(None, {"colors": "#abcdef"}).colors == ["#abcdef"]

    def test_bad_range_shape(self):
        cfg = resolve_config(None, {"opacity_range": [0.1], "stroke_width_range": "wide"})
        assert cfg.opacity_range == (0.08, 0.22)
        assert cfg.stroke_width_range == (1.0, 3.0)

    def test_empty_selector(self):
        assert resolve_config(None, {"target_selector": "  "}).target_selector == ".slide"

    def test_several_bad_fields_at_once(self):
        cfg = resolve_config(None, {"density": None, "layers": "x", "z_index": "top", "colors": None})
        assert cfg.density == 24
        assert cfg.layers == 3
        assert cfg.z_index == 0
        assert cfg.colors == DEFAULT_COLORS

    def test_theme_by_hash_wrong_type(self):
        assert resolve_config(None, {"theme_by_hash": ["#a"]}).theme_by_hash == {}

    def test_integers_too_large_for_float(self):
        huge = 10**400
        cfg = resolve_config(
            None,
            {
                "density": huge,
                "layers": huge,
                "z_index": -huge,
                "inset": huge,
                "center_avoid_radius": huge,
                "opacity_range": [0, huge],
                "stroke_width_range": [huge, 1],
            },
        )
        assert cfg.density == 24
        assert cfg.layers == 3
        assert cfg.z_index == 0
        assert cfg.inset == "1em"
        assert cfg.center_avoid_radius == 0.22
        assert cfg.opacity_range == (0.08, 0.22)
        assert cfg.stroke_width_range == (1.0, 3.0)


class TestEnabledKinds:
    def test_all_enabled_in_fixed_order(self, default_config):
        assert default_config.enabled_kinds() == [
            ShapeKind.CIRCLE,
            ShapeKind.TRIANGLE,
            ShapeKind.LINE,
            ShapeKind.CONFETTI,
            ShapeKind.BLOB,
        ]

    def test_subset(self):
        cfg = resolve_config(None, {"shapes": {"circles": False, "lines": 0, "blobs": None}})
        assert cfg.enabled_kinds() == [ShapeKind.TRIANGLE, ShapeKind.CONFETTI]
