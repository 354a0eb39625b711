from __future__ import annotations
from typing import Dict, List, Optional
from pathlib import Path
import os
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
    model_validator,
)
from tomlkit import document, dumps, table

from streamstack.layout.baseline import resolve_mode


# ---------- Leaf models ----------

class EnvCfg(BaseModel):
    project_name: str = "streamstack"
    theme: str = "dark_blue"


class GraphCfg(BaseModel):
    baseline: str = "zero"
    duration_ms: float = Field(1000.0, ge=0)
    tick_ms: float = Field(20.0, gt=0)

    @field_validator("baseline", mode="before")
    @classmethod
    def _resolve_baseline(cls, v):
        return resolve_mode(None if v is None else str(v))


class PaddingCfg(BaseModel):
    left: float = 20
    right: float = 20
    top: float = 10
    bottom: float = 32


class ViewportCfg(BaseModel):
    width: int = 960
    height: int = 480
    padding: PaddingCfg = PaddingCfg()
    grad_spacing: float = Field(100.0, gt=0)
    grad_height: float = 8.0

    @model_validator(mode="after")
    def _plot_area_ok(self):
        p = self.padding
        if self.width - p.left - p.right <= 0:
            raise ValueError("viewport width leaves no room for the plot after padding")
        # y mapping divides by (-h + 2*top + bottom)
        if -self.height + 2 * p.top + p.bottom == 0:
            raise ValueError("viewport height/padding give a zero vertical scale")
        return self


class ThemeCfg(BaseModel):
    template: str = "plotly_dark"
    paper_bgcolor: str = "#0b1220"
    plot_bgcolor: str = "#0b1220"
    font_color: str = "#e5e7eb"
    colorway: List[str] = [
        "#2563eb", "#06b6d4", "#10b981", "#f59e0b",
        "#ef4444", "#8b5cf6", "#ec4899", "#84cc16",
    ]


def _default_themes() -> Dict[str, ThemeCfg]:
    return {
        "dark_blue": ThemeCfg(),
        "light": ThemeCfg(
            template="plotly_white",
            paper_bgcolor="#ffffff",
            plot_bgcolor="#ffffff",
            font_color="#111827",
        ),
    }


class ChartsCfg(BaseModel):
    export_static_png: bool = False
    # PNG (Playwright) settings
    png_width: int = 1200
    png_height: int = 700
    png_scale: float = 2.0
    themes: Dict[str, ThemeCfg] = Field(default_factory=_default_themes)


class LoggingCfg(BaseModel):
    level: str = "INFO"
    structured_json: bool = True


# ---------- Root ----------

class RootCfg(BaseModel):
    model_config = ConfigDict(extra="ignore")

    env: EnvCfg = EnvCfg()
    graph: GraphCfg = GraphCfg()
    viewport: ViewportCfg = ViewportCfg()
    charts: ChartsCfg = ChartsCfg()
    logging: LoggingCfg = LoggingCfg()

    # Private attribute (not a field); where the TOML came from, if anywhere
    _config_path: Optional[Path] = PrivateAttr(default=None)

    @property
    def config_path(self) -> Optional[Path]:
        return self._config_path

    def theme(self, name: Optional[str] = None) -> ThemeCfg:
        key = name or self.env.theme
        themes = self.charts.themes
        if key in themes:
            return themes[key]
        return themes.get("dark_blue", ThemeCfg())

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str]) -> "RootCfg":
        import tomllib

        p = Path(path)

        def _parse_raw_dict() -> dict:
            # 1) Try normal binary parse
            try:
                with p.open("rb") as f:
                    return tomllib.load(f)
            except tomllib.TOMLDecodeError:
                pass

            # 2) Retry: decode with utf-8-sig (strips BOM) and stray zero-width chars
            text = p.read_text(encoding="utf-8-sig", errors="replace")
            cleaned = text.strip().lstrip("\ufeff\u200b\u200c\u200d\u2060")
            try:
                return tomllib.loads(cleaned)
            except tomllib.TOMLDecodeError as e:
                snippet = cleaned[:80].replace("\n", "\\n")
                raise RuntimeError(
                    f"Failed to parse TOML at {p} after BOM/cleanup. "
                    f"First chars: {snippet!r}"
                ) from e

        raw = _parse_raw_dict()

        # every section is optional
        raw.setdefault("env", {})
        raw.setdefault("graph", {})
        raw.setdefault("viewport", {})
        raw["viewport"].setdefault("padding", {})
        raw.setdefault("charts", {})
        raw.setdefault("logging", {})

        charts = dict(raw["charts"])
        themes = _default_themes()
        for name, theme_spec in (charts.pop("themes", None) or {}).items():
            themes[name] = ThemeCfg(**theme_spec)

        cfg = cls(
            env=EnvCfg(**raw["env"]),
            graph=GraphCfg(**raw["graph"]),
            viewport=ViewportCfg(**raw["viewport"]),
            charts=ChartsCfg(**charts, themes=themes),
            logging=LoggingCfg(**raw["logging"]),
        )
        cfg._config_path = p.resolve()
        return cfg

    @classmethod
    def load(cls, path: str | None = None) -> "RootCfg":
        final = Path(path or os.environ.get("STREAMSTACK_CFG", "config/config.toml")).resolve()
        if path is None and not final.exists():
            # no file anywhere: run on defaults
            return cls()
        return cls.from_toml(final)

    def to_toml(self) -> str:
        """Serialize the effective configuration back to TOML text."""
        doc = document()
        for section in ("env", "graph", "logging"):
            doc.add(section, getattr(self, section).model_dump())

        vp = table()
        vp_dump = self.viewport.model_dump()
        padding = vp_dump.pop("padding")
        for k, v in vp_dump.items():
            vp.add(k, v)
        vp.add("padding", padding)
        doc.add("viewport", vp)

        charts = table()
        ch_dump = self.charts.model_dump()
        themes = ch_dump.pop("themes")
        for k, v in ch_dump.items():
            charts.add(k, v)
        charts.add("themes", themes)
        doc.add("charts", charts)
        return dumps(doc)


def load_config(path: str | None = None) -> RootCfg:
    return RootCfg.load(path)
