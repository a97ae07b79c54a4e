from dataclasses import dataclass, field
from typing import Mapping

# Overrides applied to sections on dark or colored backgrounds
_ON_DARK = {
    "--color-on-surface": "#f4f4f5",
    "--color-on-surface-secondary": "#d4d4d8",
    "--color-on-surface-muted": "#a1a1aa",
    "--color-card": "rgba(255,255,255,0.06)",
    "--card-border-color": "rgba(255,255,255,0.1)",
    "--color-card-hover": "rgba(255,255,255,0.08)",
    "--icon-container-bg": "rgba(255,255,255,0.1)",
    "--icon-container-color": "#f4f4f5",
    "--color-input-border": "rgba(255,255,255,0.2)",
    "--color-border": "rgba(255,255,255,0.1)",
    "--color-surface-alt": "rgba(255,255,255,0.05)",
    "--btn-primary-bg": "white",
    "--btn-primary-color": "var(--color-primary-700)",
    "--color-link": "rgba(255,255,255,0.85)",
    "--color-link-hover": "white",
}

_ON_GRADIENT = {
    "background": "var(--gradient-accent)",
    "--color-on-surface": "#ffffff",
    "--color-on-surface-secondary": "rgba(255,255,255,0.85)",
    "--color-on-surface-muted": "rgba(255,255,255,0.65)",
    "--color-card": "rgba(255,255,255,0.1)",
    "--card-border-color": "rgba(255,255,255,0.15)",
    "--color-card-hover": "rgba(255,255,255,0.12)",
    "--icon-container-bg": "rgba(255,255,255,0.15)",
    "--icon-container-color": "#ffffff",
    "--color-input-border": "rgba(255,255,255,0.25)",
    "--color-border": "rgba(255,255,255,0.15)",
    "--color-surface-alt": "rgba(255,255,255,0.08)",
    "--btn-primary-bg": "white",
    "--btn-primary-color": "var(--color-primary-700)",
    "--color-link": "rgba(255,255,255,0.85)",
    "--color-link-hover": "white",
}


@dataclass(frozen=True)
class Background:
    class_name: str
    declarations: Mapping[str, str] = field(default_factory=dict)

    @property
    def style(self) -> str:
        return "; ".join(f"{name}: {value}" for name, value in self.declarations.items())


BACKGROUNDS: Mapping[str, Background] = {
    "default": Background("section-padding bg-surface"),
    "muted": Background("section-padding bg-surface-alt"),
    "accent": Background("section-padding bg-primary-900", _ON_DARK),
    "gradient": Background("section-padding bg-gradient", _ON_GRADIENT),
}


def resolve_background(name, default: str = "default") -> Background:
    if isinstance(name, str) and name in BACKGROUNDS:
        return BACKGROUNDS[name]
    return BACKGROUNDS[default]
