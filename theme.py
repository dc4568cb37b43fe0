"""
Shared colour palette for the visualizer windows.
"""

# ── Theme Colors  (Catppuccin Mocha) ──
COLORS = {
    "bg":           "#1e1e2e",
    "bg_secondary": "#181825",
    "bg_tertiary":  "#11111b",
    "surface":      "#313244",
    "overlay":      "#45475a",
    "text":         "#cdd6f4",
    "subtext":      "#a6adc8",
    "green":        "#a6e3a1",
    "red":          "#f38ba8",
    "yellow":       "#f9e2af",
    "mauve":        "#cba6f7",
    "peach":        "#fab387",
    "teal":         "#94e2d5",
    "sky":          "#89dceb",
    "selection":    "#45475a",
    "toolbar_bg":   "#181825",
    "accent":       "#89b4fa",
    "error":        "#f38ba8",
    "success":      "#a6e3a1",
    "warning":      "#f9e2af",
    "button_bg":    "#313244",
    "button_hover": "#45475a",
    "current_line": "#3b3f5c",
    "changed":      "#3d3a26",
}

# Timeline colour per history kind
HISTORY_COLORS = {
    "loop":       COLORS["mauve"],
    "condition":  COLORS["yellow"],
    "assignment": COLORS["accent"],
    "output":     COLORS["green"],
    "other":      COLORS["subtext"],
}

# Status bar colour per execution status
STATUS_COLORS = {
    "idle":     COLORS["subtext"],
    "running":  COLORS["accent"],
    "paused":   COLORS["warning"],
    "complete": COLORS["success"],
    "error":    COLORS["error"],
}

# Bar colours for the sort trace window
BAR_COLORS = {
    "default":   COLORS["overlay"],
    "comparing": COLORS["yellow"],
    "swapping":  COLORS["red"],
    "sorted":    COLORS["green"],
}
