"""Configuration Package

Layout and field limits. The form schema itself is fixed in code; these are
the tunable numbers around it, validated the same way whether they come from
the defaults or from a caller building a custom Config.
"""

from dataclasses import dataclass, fields

from commitform.output import print_warning


@dataclass
class Config:
    """Layout and field limits with sensible defaults."""
    max_width: int = 120          # Total frame width cap
    form_width: int = 80          # Widest the form pane may render
    status_width: int = 40        # Fixed width of the live-status pane
    min_status_width: int = 16    # Below this the status pane is hidden
    frame_margin: int = 5         # Base padding: 1 left + 4 right
    title_max_length: int = 72
    description_limit: int = 400

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        for f in fields(self):
            value = getattr(self, f.name)
            minimum = 0 if f.name == 'frame_margin' else 1
            if not isinstance(value, int) or isinstance(value, bool) or value < minimum:
                default = getattr(defaults, f.name)
                warnings.append(f"Invalid {f.name} '{value}', using {default}")
                setattr(self, f.name, default)

        if self.min_status_width > self.status_width:
            warnings.append(
                f"min_status_width {self.min_status_width} exceeds status_width, "
                f"using {self.status_width}"
            )
            self.min_status_width = self.status_width

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


def load_config(**overrides) -> Config:
    """Build the runtime config, printing any validation warnings to stderr."""
    config = Config.from_dict(overrides)
    for warning in config.validate():
        print_warning(f"Config warning: {warning}")
    return config


__all__ = [
    "Config",
    "load_config",
]
