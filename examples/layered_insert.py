#!/usr/bin/env python3
"""
Layered Insert Example

Draws a three-layer foam insert for a meter case:
- Base layer with no cavities
- Middle layer with a meter pocket and a round sensor well
- Top layer with a finger notch and a poly cable channel

Outputs:
- SVG files (one per layer)
- Multi-page PDF layer drawing
"""

from datetime import date
from pathlib import Path

from foamdraw.drawing_generator import FoamDrawing
from foamdraw.layout_package import drawing_input_from_layout, single_layer_drawing

LAYOUT = {
    "block": {"lengthIn": 18, "widthIn": 12, "heightIn": 4},
    "stack": [
        {"label": "BASE", "thicknessIn": 1, "materialName": "2LB PE"},
        {
            "label": "MIDDLE",
            "thicknessIn": 2,
            "materialName": "1.7LB PE",
            "cavities": [
                {"id": "meter", "shape": "rect", "x": 0.08, "y": 0.15,
                 "lengthIn": 7.5, "widthIn": 5, "depthIn": 1.75, "label": "METER"},
                {"id": "sensor", "shape": "circle", "x": 0.62, "y": 0.2,
                 "lengthIn": 2.5, "widthIn": 2.5, "depthIn": 1.25},
            ],
        },
        {
            "label": "TOP",
            "thicknessIn": 1,
            "materialName": "1.7LB PE",
            "cavities": [
                {"id": "notch", "shape": "rect", "x": 0.3, "y": 0.0,
                 "lengthIn": 2, "widthIn": 1, "depthIn": 1},
                {"id": "cable", "shape": "poly", "x": 0.6, "y": 0.55,
                 "lengthIn": 5, "widthIn": 3, "depthIn": 0.5,
                 "points": [[0.6, 0.55], [0.88, 0.55], [0.88, 0.8], [0.75, 0.8]]},
            ],
        },
    ],
}


def main():
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    print("Layered Insert Example")
    print("=" * 50)

    drawing_input = drawing_input_from_layout(
        LAYOUT,
        quote_no="Q-1001",
        customer_name="ACME INSTRUMENTS",
        notes=[
            "ALL DIMENSIONS IN INCHES.",
            "LAYERS TO BE LAMINATED.",
        ],
        today=date.today(),
    )

    drawing = FoamDrawing(drawing_input, strict=True)
    drawing.generate()

    svg_paths = drawing.export_svg(output_dir / "layered_insert")
    for path in svg_paths:
        print(f"Exported SVG: {path}")

    pdf_path = output_dir / "layered_insert.pdf"
    drawing.export_pdf(pdf_path)
    print(f"Exported PDF: {pdf_path} ({drawing.page_count} pages)")

    # Per-layer export: one sheet for the middle layer
    middle = FoamDrawing(single_layer_drawing(drawing_input, 1), strict=True)
    middle_path = output_dir / "layered_insert_middle.pdf"
    middle.export_pdf(middle_path)
    print(f"Exported PDF: {middle_path}")

    print("\nView scales:")
    for page in drawing.document.pages:
        scales = ", ".join(f"{kind.value}={scale:.2f}" for kind, scale in page.view_scales.items())
        print(f"  Sheet {page.page_number} ({page.page_title}): {scales}")


if __name__ == "__main__":
    main()
