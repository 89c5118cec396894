"""Drawing surfaces the map renderer can paint onto."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

SVG_NS = "http://www.w3.org/2000/svg"

PIN_RADIUS = 6
PIN_COLOR = "#38bdf8"
EDGE_COLOR = "rgba(148,163,184,0.55)"
LABEL_COLOR = "#e5e7eb"


@runtime_checkable
class DrawingSurface(Protocol):
    """A clear-and-redraw target in its own pixel coordinate space."""

    @property
    def width(self) -> int:
        ...

    @property
    def height(self) -> int:
        ...

    def clear(self) -> None:
        """Remove everything drawn so far."""
        ...

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        """Draw one relation edge."""
        ...

    def draw_pin(self, place_id: str, cx: float, cy: float, label: str, filled: bool) -> None:
        """Draw one place pin with its label. Filled pins are visited places."""
        ...


class SvgSurface:
    """Renders the map as a standalone SVG document."""

    def __init__(self, width: int = 600, height: int = 420) -> None:
        self._width = width
        self._height = height
        self._root = self._new_root()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _new_root(self) -> ET.Element:
        return ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "viewBox": f"0 0 {self._width} {self._height}",
                "width": str(self._width),
                "height": str(self._height),
            },
        )

    def clear(self) -> None:
        self._root = self._new_root()

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        ET.SubElement(
            self._root,
            "line",
            {
                "x1": f"{x1:.1f}",
                "y1": f"{y1:.1f}",
                "x2": f"{x2:.1f}",
                "y2": f"{y2:.1f}",
                "stroke": EDGE_COLOR,
                "stroke-width": "1.5",
            },
        )

    def draw_pin(self, place_id: str, cx: float, cy: float, label: str, filled: bool) -> None:
        group = ET.SubElement(
            self._root,
            "g",
            {"class": "pin", "data-place-id": place_id, "style": "cursor: pointer"},
        )
        ET.SubElement(
            group,
            "circle",
            {
                "cx": f"{cx:.1f}",
                "cy": f"{cy:.1f}",
                "r": str(PIN_RADIUS),
                "fill": PIN_COLOR if filled else "transparent",
                "stroke": PIN_COLOR,
                "stroke-width": "1.5",
            },
        )
        text = ET.SubElement(
            group,
            "text",
            {
                "x": f"{cx + 9:.1f}",
                "y": f"{cy - 9:.1f}",
                "font-size": "10",
                "fill": LABEL_COLOR,
            },
        )
        text.text = label

    def to_svg(self) -> str:
        """Serialize the current drawing."""
        return ET.tostring(self._root, encoding="unicode")

    def save(self, path: Path | str) -> Path:
        """Write the current drawing to an .svg file."""
        path = Path(path)
        path.write_text(self.to_svg(), encoding="utf-8")
        return path


@dataclass(frozen=True)
class LineCall:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class PinCall:
    place_id: str
    cx: float
    cy: float
    label: str
    filled: bool


class RecordingSurface:
    """Keeps draw calls in memory, for headless callers and tests."""

    def __init__(self, width: int = 600, height: int = 420) -> None:
        self._width = width
        self._height = height
        self.lines: list[LineCall] = []
        self.pins: list[PinCall] = []
        self.clear_count = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        self.lines = []
        self.pins = []
        self.clear_count += 1

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.lines.append(LineCall(x1, y1, x2, y2))

    def draw_pin(self, place_id: str, cx: float, cy: float, label: str, filled: bool) -> None:
        self.pins.append(PinCall(place_id, cx, cy, label, filled))

    def pin_for(self, place_id: str) -> PinCall | None:
        for pin in self.pins:
            if pin.place_id == place_id:
                return pin
        return None
