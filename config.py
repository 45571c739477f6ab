from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from core.tooltip import TooltipMetrics


@dataclass
class GraphConfig:
    tooltip_offset: float = 10.0
    tooltip_flip_distance: float = 190.0
    tooltip_flip_threshold: float = 200.0
    tooltip_base_width: float = 150.0
    tooltip_char_width_factor: float = 8.0
    # empty follows the system locale's date order
    timestamp_format: str = ""
    show_peak_marker: bool = False
    notification_duration_ms: int = 3000
    theme: str = "Midnight"
    ini_path: Path | None = None

    @classmethod
    def load(cls, ini_path: str | Path | None = None) -> "GraphConfig":
        cfg = cls()
        path = Path(ini_path or "config.ini")
        if path.exists():
            import configparser

            parser = configparser.ConfigParser(interpolation=None)
            parser.read(path)
            tooltip = parser["tooltip"] if "tooltip" in parser else None
            if tooltip:
                cfg.tooltip_offset = tooltip.getfloat("offset", fallback=cfg.tooltip_offset)
                cfg.tooltip_flip_distance = tooltip.getfloat(
                    "flip_distance", fallback=cfg.tooltip_flip_distance
                )
                cfg.tooltip_flip_threshold = tooltip.getfloat(
                    "flip_threshold", fallback=cfg.tooltip_flip_threshold
                )
                cfg.tooltip_base_width = tooltip.getfloat(
                    "base_width", fallback=cfg.tooltip_base_width
                )
                cfg.tooltip_char_width_factor = tooltip.getfloat(
                    "char_width_factor", fallback=cfg.tooltip_char_width_factor
                )
                fmt = tooltip.get("timestamp_format", fallback="").strip()
                if fmt:
                    cfg.timestamp_format = fmt

            chart = parser["chart"] if "chart" in parser else None
            if chart:
                cfg.show_peak_marker = chart.getboolean(
                    "show_peak_marker", fallback=cfg.show_peak_marker
                )

            notification = parser["notification"] if "notification" in parser else None
            if notification:
                duration = notification.getint("duration_ms", fallback=cfg.notification_duration_ms)
                if duration > 0:
                    cfg.notification_duration_ms = duration

            ui_section = parser["ui"] if "ui" in parser else None
            if ui_section:
                cfg.theme = ui_section.get("theme", fallback=cfg.theme)
        cfg.ini_path = path
        return cfg

    def tooltip_metrics(self) -> TooltipMetrics:
        return TooltipMetrics(
            offset=self.tooltip_offset,
            flip_distance=self.tooltip_flip_distance,
            flip_threshold=self.tooltip_flip_threshold,
            base_width=self.tooltip_base_width,
            char_width_factor=self.tooltip_char_width_factor,
        )

    def save(self) -> None:
        if self.ini_path is None:
            return
        import configparser

        parser = configparser.ConfigParser(interpolation=None)
        parser["tooltip"] = {
            "offset": f"{self.tooltip_offset:g}",
            "flip_distance": f"{self.tooltip_flip_distance:g}",
            "flip_threshold": f"{self.tooltip_flip_threshold:g}",
            "base_width": f"{self.tooltip_base_width:g}",
            "char_width_factor": f"{self.tooltip_char_width_factor:g}",
            "timestamp_format": self.timestamp_format,
        }
        parser["chart"] = {
            "show_peak_marker": "true" if self.show_peak_marker else "false",
        }
        parser["notification"] = {
            "duration_ms": str(self.notification_duration_ms),
        }
        parser["ui"] = {
            "theme": self.theme,
        }
        with self.ini_path.open("w") as fh:
            parser.write(fh)
