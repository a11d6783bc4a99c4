import io
import logging

import ezdxf
from ezdxf import colors
from ezdxf.enums import TextEntityAlignment

from neighbourhood_visualizer.metrics import land_use_budget
from neighbourhood_visualizer.renderer import COLOR_MAP, render
from neighbourhood_visualizer.surfaces import AffineSurface

logger = logging.getLogger(__name__)

TABLE_LAYERS = {
    "TABLE_LINES": (100, 100, 100),
    "TABLE_TEXT": (0, 0, 0),
}


class DxfSurface(AffineSurface):
    """
    Draws onto the modelspace of an ezdxf document. Fills become solid
    hatches and strokes become closed polylines, one DXF layer per drawing
    layer. The y axis is flipped so the drawing reads top-down like a screen.
    """

    def __init__(self, doc=None, line_width=0.3):
        super().__init__()
        self.doc = doc or ezdxf.new("R2010")
        self.msp = self.doc.modelspace()
        self.line_width = line_width
        for layer_name in list(COLOR_MAP) + list(TABLE_LAYERS):
            if layer_name not in self.doc.layers:
                self.doc.layers.new(name=layer_name)

    def clear(self, width, height):
        self.msp.delete_all_entities()
        self.transform = (1.0, 0.0, 0.0, -1.0, 0.0, float(height))

    def fill_rect(self, x, y, width, height, layer):
        if width <= 0 or height <= 0:
            return
        geom = self.place_rect(x, y, width, height)
        hatch = self.msp.add_hatch(dxfattribs={"layer": layer})
        hatch.set_pattern_fill("SOLID")
        if layer in COLOR_MAP:
            hatch.dxf.true_color = colors.rgb2int(COLOR_MAP[layer])
        hatch.paths.add_polyline_path([(p[0], p[1]) for p in geom.exterior.coords], is_closed=True)

    def stroke_rect(self, x, y, width, height, layer):
        geom = self.place_rect(x, y, width, height)
        polyline = self.msp.add_lwpolyline(list(geom.exterior.coords)[:-1], close=True, dxfattribs={"layer": layer})
        if layer in COLOR_MAP:
            polyline.dxf.true_color = colors.rgb2int(COLOR_MAP[layer])
        polyline.dxf.lineweight = int(self.line_width * 100)  # lineweight in 1/100mm


def _draw_summary_table(msp, statistics, x_start, y_start):
    col_width_label = 180
    col_width_val = 200
    total_width = col_width_label + col_width_val

    def add_text(value, x, y, height, align):
        text = msp.add_text(str(value), dxfattribs={"layer": "TABLE_TEXT", "height": height})
        text.dxf.true_color = colors.rgb2int(TABLE_LAYERS["TABLE_TEXT"])
        text.set_placement((x, y), align=align)

    def draw_row(label, value, y, is_header=False):
        h = 9.0 if is_header else 6.5
        row_height = 28 if is_header else 21

        msp.add_line((x_start, y), (x_start + total_width, y), dxfattribs={"layer": "TABLE_LINES"})
        msp.add_line((x_start, y), (x_start, y + row_height), dxfattribs={"layer": "TABLE_LINES"})
        msp.add_line((x_start + col_width_label, y), (x_start + col_width_label, y + row_height),
                     dxfattribs={"layer": "TABLE_LINES"})
        msp.add_line((x_start + total_width, y), (x_start + total_width, y + row_height),
                     dxfattribs={"layer": "TABLE_LINES"})

        if label:
            add_text(label, x_start + 6, y + row_height / 2, h, TextEntityAlignment.MIDDLE_LEFT)
        if value is not None and str(value).strip() != "":
            add_text(value, x_start + total_width - 6, y + row_height / 2, h, TextEntityAlignment.MIDDLE_RIGHT)
        return row_height

    summary = land_use_budget(statistics)
    budget = summary["land_use_budget"]
    per_sq_km = summary["per_sq_km"]

    rows = [
        ("NEIGHBOURHOOD SUMMARY (1 km²)", "", True),
        ("Road", f"{budget['road_area']['percent']}%", False),
        ("Sidewalk", f"{budget['sidewalk_area']['percent']}%", False),
        ("Yard", f"{budget['yard_area']['percent']}%", False),
        ("Building", f"{budget['building_area']['percent']}%", False),
        ("Park", f"{budget['park_area']['percent']}%", False),
        ("Floor Space", f"{per_sq_km['floor_space_sqm']:,} sqm", False),
        ("Lots", f"{per_sq_km['lots']:,}", False),
        ("Building Footprint", f"{summary['building_footprint_sqm']:,} sqm", False),
    ]

    cur_y = y_start
    for label, value, is_header in rows:
        cur_y -= 28 if is_header else 21
        draw_row(label, value, cur_y, is_header)

    # Bottom line
    msp.add_line((x_start, cur_y), (x_start + total_width, cur_y), dxfattribs={"layer": "TABLE_LINES"})


def layout_to_dxf(params, plan, statistics=None):
    """
    Render the layout into a new DXF document, with a summary table to the
    right of the drawing when statistics are given. Nothing is written to disk.
    """
    surface = DxfSurface()
    render(surface, params, plan)

    if statistics is not None:
        try:
            _draw_summary_table(surface.msp, statistics, plan.surface_width + 50, plan.surface_height)
        except ezdxf.DXFError:
            logger.exception("Could not draw summary table")

    return surface.doc


def dxf_to_bytes(doc):
    stream = io.StringIO()
    doc.write(stream)
    return stream.getvalue().encode("utf-8")
