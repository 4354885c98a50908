#!/usr/bin/env python3
"""
Tests for converting stored layout packages into drawing inputs.
"""

import json
from datetime import date

import pytest

from foamdraw.layout_package import (
    LayoutPackageError,
    drawing_input_from_layout,
    load_layout_file,
    single_layer_drawing,
)
from foamdraw.model import CavityShape, validate_drawing_input


@pytest.fixture
def layout():
    return {
        "block": {"lengthIn": 18, "widthIn": 12, "heightIn": 3},
        "stack": [
            {"thicknessIn": 1, "cavities": []},
            {
                "thicknessIn": 2,
                "label": "Top",
                "materialName": "1.7LB PE",
                "cavities": [
                    {"shape": "rect", "x": 0.1, "y": 0.1, "lengthIn": 4, "widthIn": 3},
                    {"id": "gauge", "shape": "circle", "x": 0.5, "y": 0.5,
                     "length": 2, "width": 2, "depth_in": 1.5, "diameter_in": 1.75},
                ],
            },
        ],
    }


# =============================================================================
# CONVERSION TESTS
# =============================================================================


class TestConversion:
    """Test layout package conversion."""

    def test_block_and_layers(self, layout):
        drawing = drawing_input_from_layout(layout, quote_no="Q-7", customer_name="ACME",
                                            today=date(2024, 5, 6))

        assert drawing.quote_no == "Q-7"
        assert drawing.customer_name == "ACME"
        assert drawing.block.length_in == 18.0
        assert drawing.block.height_in == 3.0
        assert len(drawing.layers) == 2
        assert drawing.date == "2024-05-06"
        validate_drawing_input(drawing, strict=True)

    def test_layer_defaults(self, layout):
        base, top = drawing_input_from_layout(layout, quote_no="Q").layers

        assert base.id == "layer_0"
        assert base.label == "L1"
        assert base.material_name == "Layer 1"
        assert top.label == "Top"
        assert top.material_name == "1.7LB PE"

    def test_material_names_fill_gaps(self, layout):
        base, top = drawing_input_from_layout(
            layout, quote_no="Q", material_names=["2LB PU", "IGNORED"]
        ).layers

        assert base.material_name == "2LB PU"
        # the layer's own material wins
        assert top.material_name == "1.7LB PE"

    def test_cavity_defaults_and_aliases(self, layout):
        rect, circle = drawing_input_from_layout(layout, quote_no="Q").layers[1].cavities

        assert rect.id == "cav_0"
        assert rect.depth_in == 2.0  # through the layer
        assert circle.id == "gauge"
        assert circle.shape is CavityShape.CIRCLE
        assert circle.length_in == 2.0
        assert circle.depth_in == 1.5
        assert circle.diameter_in == 1.75

    @pytest.mark.parametrize("locked,revision", [(False, "AS"), (True, "A")])
    def test_revision(self, layout, locked, revision):
        drawing = drawing_input_from_layout(layout, quote_no="Q", locked=locked)
        assert drawing.revision == revision

    def test_notes(self, layout):
        drawing = drawing_input_from_layout(layout, quote_no="Q", notes=["KEEP DRY"])
        assert drawing.notes == ("KEEP DRY",)

    def test_layers_key_and_missing_height(self, layout):
        layout["layers"] = layout.pop("stack")
        del layout["block"]["heightIn"]
        drawing = drawing_input_from_layout(layout, quote_no="Q")

        assert len(drawing.layers) == 2
        assert drawing.block.height_in == 3.0

    def test_missing_block(self, layout):
        del layout["block"]
        with pytest.raises(LayoutPackageError, match="no block"):
            drawing_input_from_layout(layout, quote_no="Q")

    def test_zero_depth_goes_through_layer(self, layout):
        layout["stack"][1]["cavities"][0]["depthIn"] = 0
        rect = drawing_input_from_layout(layout, quote_no="Q").layers[1].cavities[0]
        assert rect.depth_in == 2.0

    def test_stack_not_a_list(self, layout):
        layout["stack"] = {"thicknessIn": 1}
        with pytest.raises(LayoutPackageError, match="not a list"):
            drawing_input_from_layout(layout, quote_no="Q")

    def test_bad_number(self, layout):
        layout["block"]["lengthIn"] = "long"
        with pytest.raises(LayoutPackageError, match="lengthIn"):
            drawing_input_from_layout(layout, quote_no="Q")

    def test_unknown_shape(self, layout):
        layout["stack"][1]["cavities"][0]["shape"] = "star"
        with pytest.raises(LayoutPackageError, match="star"):
            drawing_input_from_layout(layout, quote_no="Q")


# =============================================================================
# FLAT PACKAGE TESTS
# =============================================================================


class TestFlatPackage:
    """Test packages with top-level cavities and no stack."""

    @pytest.fixture
    def flat(self):
        return {
            "block": {"lengthIn": 12, "widthIn": 10, "thicknessIn": 2},
            "cavities": [
                {"shape": "rect", "x": 0.1, "y": 0.1, "lengthIn": 3, "widthIn": 2},
                {"id": "pocket", "shape": "circle", "x": 0.5, "y": 0.5,
                 "lengthIn": 2, "widthIn": 2, "depthIn": 0.75},
            ],
        }

    def test_single_layer_from_top_level_cavities(self, flat):
        drawing = drawing_input_from_layout(flat, quote_no="Q-1")

        assert drawing.block.height_in == 2.0
        (layer,) = drawing.layers
        assert layer.id == "layer_1"
        assert layer.label == "L1"
        assert layer.thickness_in == 2.0
        assert layer.material_name == "Foam"
        rect, circle = layer.cavities
        assert rect.id == "cav_0"
        assert rect.depth_in == 2.0
        assert circle.id == "pocket"
        assert circle.depth_in == 0.75
        validate_drawing_input(drawing, strict=True)

    @pytest.mark.parametrize("stack_key", ["stack", "layers"])
    def test_empty_stack_is_flat(self, flat, stack_key):
        flat[stack_key] = []
        assert len(drawing_input_from_layout(flat, quote_no="Q").layers) == 1

    def test_first_material_name(self, flat):
        drawing = drawing_input_from_layout(flat, quote_no="Q", material_names=["1.7LB PE"])
        assert drawing.layers[0].material_name == "1.7LB PE"

    def test_no_cavities(self, flat):
        del flat["cavities"]
        (layer,) = drawing_input_from_layout(flat, quote_no="Q").layers
        assert layer.cavities == ()

    def test_needs_block_height(self, flat):
        del flat["block"]["thicknessIn"]
        with pytest.raises(LayoutPackageError, match="no block height"):
            drawing_input_from_layout(flat, quote_no="Q")


# =============================================================================
# SINGLE LAYER TESTS
# =============================================================================


class TestSingleLayer:
    """Test the per-layer drawing input."""

    def test_block_height_is_layer_thickness(self, layout):
        drawing = drawing_input_from_layout(layout, quote_no="Q")
        single = single_layer_drawing(drawing, 1)

        assert single.layers == (drawing.layers[1],)
        assert single.block.height_in == 2.0
        assert single.block.length_in == drawing.block.length_in
        validate_drawing_input(single, strict=True)

    @pytest.mark.parametrize("index", [-1, 2])
    def test_out_of_range(self, layout, index):
        drawing = drawing_input_from_layout(layout, quote_no="Q")
        with pytest.raises(LayoutPackageError, match="out of range"):
            single_layer_drawing(drawing, index)


# =============================================================================
# FILE LOADING TESTS
# =============================================================================


class TestLoadLayoutFile:
    """Test reading JSON and YAML layout files."""

    def test_json(self, layout, tmp_path):
        path = tmp_path / "Q-7.json"
        path.write_text(json.dumps(layout), encoding="utf-8")
        assert load_layout_file(path) == layout

    def test_yaml(self, tmp_path):
        path = tmp_path / "Q-7.yaml"
        path.write_text(
            "block: {lengthIn: 10, widthIn: 8, heightIn: 1}\n"
            "stack:\n"
            "  - thicknessIn: 1\n",
            encoding="utf-8",
        )
        data = load_layout_file(path)
        assert data["block"]["widthIn"] == 8
        assert data["stack"][0]["thicknessIn"] == 1

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(LayoutPackageError, match="mapping"):
            load_layout_file(path)
