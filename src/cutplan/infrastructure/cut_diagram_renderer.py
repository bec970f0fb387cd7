"""Cut diagram rendering for cutting plans.

This module provides SVG and ASCII rendering of bars showing piece
placements, kerf and the remaining offcut of each bar.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

from cutplan.domain.entities import Bar, CuttingPlan
from cutplan.domain.value_objects import Placement


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def _kerf_after(bar: Bar, placement: Placement) -> float:
    """Gap between a placement and the next piece, or the end of used length.

    Bars do not carry the configuration, so the kerf is read off the layout.
    """
    following = [
        p.start_position
        for p in bar.placements
        if p is not placement and p.start_position >= placement.end_position
    ]
    boundary = min(following) if following else bar.used_length
    return max(boundary - placement.end_position, 0.0)


class CutDiagramRenderer:
    """Renders bar cut diagrams in SVG and ASCII format.

    Bars are drawn as horizontal strips. Each piece occupies its length
    from its start position, followed by a kerf gap; the offcut is the
    remaining length at the right end of the bar.

    Attributes:
        scale: Pixels per millimeter for SVG rendering.
        bar_height: Height of a bar strip in pixels.
        piece_fill: Fill color for placed pieces.
        piece_stroke: Stroke color for piece outlines.
        kerf_fill: Fill color for kerf gaps.
        waste_fill: Fill color for the offcut.
        text_color: Color for labels and dimensions.
        show_dimensions: Whether to show piece lengths.
        show_labels: Whether to show drawing code and item number.
    """

    def __init__(
        self,
        scale: float = 0.2,
        bar_height: float = 40.0,
        piece_fill: str = "#ADD8E6",  # Light blue
        piece_stroke: str = "#000000",  # Black
        kerf_fill: str = "#FF6347",  # Tomato
        waste_fill: str = "#D3D3D3",  # Light gray
        text_color: str = "#000000",  # Black
        show_dimensions: bool = True,
        show_labels: bool = True,
    ) -> None:
        if scale <= 0:
            raise ValueError("scale must be positive")
        self.scale = scale
        self.bar_height = bar_height
        self.piece_fill = piece_fill
        self.piece_stroke = piece_stroke
        self.kerf_fill = kerf_fill
        self.waste_fill = waste_fill
        self.text_color = text_color
        self.show_dimensions = show_dimensions
        self.show_labels = show_labels

    @staticmethod
    def _ordered(bar: Bar) -> list[Placement]:
        return sorted(bar.placements, key=lambda p: p.start_position)

    @staticmethod
    def _header_text(bar: Bar, total_bars: int) -> str:
        return (
            f"Bar {bar.id} of {total_bars} - {bar.length:g}mm - "
            f"{bar.efficiency:.1f}% used, {bar.remaining_length:g}mm offcut"
        )

    def render_svg(self, bar: Bar, total_bars: int = 1) -> str:
        """Generate an SVG cut diagram for a single bar.

        Args:
            bar: Bar with its placements.
            total_bars: Total number of bars (for header display).

        Returns:
            SVG string representation of the bar.
        """
        header_height = 30
        svg_width = bar.length * self.scale
        svg_height = header_height + self.bar_height

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            self._render_header(bar, total_bars, svg_width, header_height),
            "  <!-- Bar outline -->",
            f'  <rect x="0" y="{header_height}" width="{svg_width}" '
            f'height="{self.bar_height}" fill="{self.waste_fill}" '
            f'stroke="{self.piece_stroke}" stroke-width="2"/>',
            "",
            "  <!-- Placed pieces -->",
        ]
        for placement in self._ordered(bar):
            parts.append(self._render_piece(placement, bar, header_height))

        parts.append("")
        parts.append("</svg>")
        return "\n".join(parts)

    def _render_header(
        self,
        bar: Bar,
        total_bars: int,
        svg_width: float,
        header_height: float,
    ) -> str:
        header_text = escape(self._header_text(bar, total_bars))
        return (
            f"  <!-- Header -->\n"
            f'  <rect x="0" y="0" width="{svg_width}" height="{header_height}" '
            f'fill="#E0E0E0"/>\n'
            f'  <text x="10" y="{header_height - 8}" '
            f'font-family="Arial, sans-serif" font-size="14" '
            f'fill="{self.text_color}">{header_text}</text>'
        )

    def _render_piece(
        self, placement: Placement, bar: Bar, header_height: float
    ) -> str:
        """Render a placed piece and its trailing kerf as SVG elements.

        The kerf rectangle is clipped to the bar end.
        """
        x = placement.start_position * self.scale
        y = header_height
        w = placement.length * self.scale
        h = self.bar_height

        kerf_end = min(placement.end_position + _kerf_after(bar, placement), bar.length)
        kerf_w = (kerf_end - placement.end_position) * self.scale

        svg_parts = [
            "  <g>",
            f'    <rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{self.piece_fill}" stroke="{self.piece_stroke}"/>',
        ]
        if kerf_w > 0:
            svg_parts.append(
                f'    <rect x="{x + w}" y="{y}" width="{kerf_w}" height="{h}" '
                f'fill="{self.kerf_fill}" stroke="none"/>'
            )

        font_size = min(12.0, w / 6, h / 3)
        if font_size >= 6:
            text_x = x + w / 2
            text_y = y + h / 2
            if self.show_labels:
                label = escape(f"{placement.drawing_code} #{placement.item_number}")
                svg_parts.append(
                    f'    <text x="{text_x}" y="{text_y - font_size / 2}" '
                    f'text-anchor="middle" font-family="Arial, sans-serif" '
                    f'font-size="{font_size}" fill="{self.text_color}">{label}</text>'
                )
            if self.show_dimensions:
                dims_y = text_y + font_size / 2 + 2 if self.show_labels else text_y
                svg_parts.append(
                    f'    <text x="{text_x}" y="{dims_y}" '
                    f'text-anchor="middle" font-family="Arial, sans-serif" '
                    f'font-size="{font_size * 0.8}" fill="{self.text_color}">'
                    f"{placement.length:g}mm</text>"
                )

        svg_parts.append("  </g>")
        return "\n".join(svg_parts)

    def render_combined_svg(self, plan: CuttingPlan) -> str:
        """Generate a single SVG with all bars of a plan stacked vertically.

        Args:
            plan: The cutting plan.

        Returns:
            Combined SVG string with all bars.
        """
        if not plan.bars:
            return (
                '<svg width="100" height="50" xmlns="http://www.w3.org/2000/svg">'
                '<text x="10" y="30">No bars to display</text></svg>'
            )

        header_height = 30
        bar_spacing = 20
        title_height = 30
        svg_width = plan.config.bar_length * self.scale
        svg_height = title_height + len(plan.bars) * (
            header_height + self.bar_height + bar_spacing
        )

        title = escape(
            f"{plan.traceability_code} - {_plural(plan.total_bars, 'bar')}, "
            f"{plan.overall_efficiency:.1f}% efficiency"
        )
        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
            f'  <text x="10" y="20" font-family="Arial, sans-serif" '
            f'font-size="16" fill="{self.text_color}">{title}</text>',
        ]

        y_offset = float(title_height)
        for bar in plan.bars:
            parts.append(f'  <g transform="translate(0, {y_offset})">')
            parts.append(f"    <!-- Bar {bar.id} -->")

            bar_svg = self.render_svg(bar, plan.total_bars)
            start_idx = bar_svg.find(">") + 1
            end_idx = bar_svg.rfind("</svg>")
            for line in bar_svg[start_idx:end_idx].strip().split("\n"):
                if line.strip():
                    parts.append(f"  {line}")

            parts.append("  </g>")
            y_offset += header_height + self.bar_height + bar_spacing

        parts.append("</svg>")
        return "\n".join(parts)

    def render_ascii(self, bar: Bar, width: int = 80, total_bars: int = 1) -> str:
        """Generate an ASCII cut diagram for a single bar.

        Pieces are drawn as ``[label====]`` segments on a strip, offcut as
        ``.``. A numbered cut list follows the strip.

        Args:
            bar: Bar with its placements.
            width: Terminal width in characters (default 80).
            total_bars: Total number of bars (for header display).

        Returns:
            ASCII string representation of the bar.
        """
        usable_width = max(width - 2, 10)
        scale_x = usable_width / bar.length
        strip = ["." for _ in range(usable_width)]

        ordered = self._ordered(bar)
        for number, placement in enumerate(ordered, start=1):
            x1 = int(placement.start_position * scale_x)
            x2 = int(placement.end_position * scale_x) - 1
            x1 = max(0, min(x1, usable_width - 1))
            x2 = max(x1, min(x2, usable_width - 1))
            for x in range(x1, x2 + 1):
                strip[x] = "="
            strip[x1] = "["
            if x2 > x1:
                strip[x2] = "]"
            label = str(number)[: max(x2 - x1 - 1, 0)]
            for i, char in enumerate(label):
                strip[x1 + 1 + i] = char

        lines: list[str] = [
            self._header_text(bar, total_bars),
            "+" + "-" * usable_width + "+",
            "|" + "".join(strip) + "|",
            "+" + "-" * usable_width + "+",
        ]
        for number, placement in enumerate(ordered, start=1):
            dims = f" {placement.length:g}mm" if self.show_dimensions else ""
            label = (
                f" {placement.drawing_code} #{placement.item_number}"
                if self.show_labels
                else ""
            )
            lines.append(
                f"  {number:>2}.{label}{dims} "
                f"@ {placement.start_position:g}-{placement.end_position:g}"
            )
        return "\n".join(lines)

    def render_all_ascii(self, plan: CuttingPlan, width: int = 80) -> str:
        """Generate ASCII cut diagrams for every bar of a plan.

        Args:
            plan: The cutting plan.
            width: Terminal width in characters.

        Returns:
            Combined ASCII string with all bars and a summary line.
        """
        if not plan.bars:
            return "No bars to display."

        parts: list[str] = []
        for bar in plan.bars:
            parts.append(self.render_ascii(bar, width, plan.total_bars))
            parts.append("")

        parts.append("=" * width)
        parts.append(
            f"SUMMARY: {_plural(plan.total_bars, 'bar')}, "
            f"{plan.overall_efficiency:.1f}% efficiency, "
            f"{plan.total_waste:g}mm waste"
        )
        return "\n".join(parts)

    def render_waste_summary(self, plan: CuttingPlan) -> str:
        """Generate a text summary of bar usage, waste and weight.

        Args:
            plan: The cutting plan.

        Returns:
            Formatted summary string.
        """
        lines: list[str] = [
            f"CUTTING PLAN {plan.traceability_code}",
            "=" * 40,
        ]
        metadata = plan.metadata
        if metadata.order_number or metadata.order_id:
            lines.append(f"Order: {metadata.order_number or metadata.order_id}")
        if metadata.material_name:
            material = metadata.material_name
            if metadata.material_description:
                material += f" ({metadata.material_description})"
            lines.append(f"Material: {material}")

        lines.extend(
            [
                f"Bar Length: {plan.config.bar_length:g}mm",
                f"Cutting Thickness: {plan.config.cutting_thickness:g}mm",
                f"Total Bars: {plan.total_bars}",
                f"Total Pieces: {plan.total_pieces}",
                f"Used Length: {plan.total_used_length:g}mm",
                f"Total Waste: {plan.total_waste:g}mm",
                f"Efficiency: {plan.overall_efficiency:.2f}%",
            ]
        )
        if plan.config.weight_per_meter > 0:
            lines.append(f"Total Weight: {plan.total_weight:.3f}")
            lines.append(f"Scrap Weight: {plan.total_scrap_weight:.3f}")

        lines.append("")
        lines.append("Per-Bar Details:")
        for bar in plan.bars:
            lines.append(
                f"  Bar {bar.id}: {_plural(bar.piece_count, 'piece')}, "
                f"{bar.efficiency:.1f}% used, {bar.remaining_length:g}mm offcut"
            )
        return "\n".join(lines)

