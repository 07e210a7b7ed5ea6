"""Compatibility color maps."""

COMPATIBILITY_COLORS: dict[bool, str] = {
    True: "green",
    False: "red bold",
}


def styled_compatibility(compatible: bool) -> str:
    color = COMPATIBILITY_COLORS[compatible]
    label = "compatible" if compatible else "unsupported"
    return f"[{color}]{label}[/{color}]"
