import math
from dataclasses import dataclass, replace

import yaml

CAMERA_POLICIES = ("growth", "bounds")
STROKE_POLICIES = ("unit", "adaptive")


class ConfigError(ValueError):
    pass


@dataclass
class DragonSettings:
    # geometry
    length: float = 100.0
    max_iterations: int = 18
    # animation
    frame_rate: int = 30
    transition_step: float = 0.01
    delay_frames: int = 60
    delay_step: int = 15
    # view
    viewport: tuple = (1500, 700)
    camera: str = "growth"
    growth_factor: float = math.sqrt(2)
    fit_fraction: float = 0.8
    padding: float = 50.0
    smoothing: float = 0.1
    zoom_in: float = 1.1
    zoom_out: float = 0.9
    min_zoom: float = 0.01
    max_zoom: float = 100.0
    # consolidation
    consolidate: bool = False
    consolidation_threshold: float = 3.0
    consolidation_interval: int = 30
    # presentation
    stroke: str = "unit"
    stroke_weight: float = 12.0
    min_stroke: float = 1.0
    max_stroke: float = 16.0
    segment_color: tuple = (0, 238, 0)
    square_color: tuple = (0, 200, 100, 200)
    cull: bool = True


default_settings = DragonSettings()

SECTIONS = {
    "geometry": ("length", "max_iterations"),
    "animation": ("frame_rate", "transition_step", "delay_frames", "delay_step"),
    "view": (
        "viewport", "camera", "growth_factor", "fit_fraction", "padding", "smoothing",
        "zoom_in", "zoom_out", "min_zoom", "max_zoom",
    ),
    "consolidation": ("consolidate", "consolidation_threshold", "consolidation_interval"),
    "presentation": ("stroke", "stroke_weight", "min_stroke", "max_stroke", "segment_color", "square_color", "cull"),
}

# section key -> dataclass attribute, where they differ
KEY_ALIASES = {
    ("consolidation", "enabled"): "consolidate",
    ("consolidation", "threshold"): "consolidation_threshold",
    ("consolidation", "interval"): "consolidation_interval",
}
ATTRIBUTE_KEYS = {attribute: key for (_, key), attribute in KEY_ALIASES.items()}


def _require(cond, msg):
    if not cond:
        raise ConfigError(msg)


def _as_number(value, path):
    _require(isinstance(value, (int, float)) and not isinstance(value, bool), f"{path} must be a number")
    return float(value)


def _as_int(value, path):
    _require(isinstance(value, int) and not isinstance(value, bool), f"{path} must be an integer")
    return int(value)


def _as_bool(value, path):
    _require(isinstance(value, bool), f"{path} must be a boolean")
    return value


def _as_choice(value, choices, path):
    _require(value in choices, f"{path} must be one of {', '.join(choices)}")
    return value


def _as_color(value, path):
    _require(
        isinstance(value, (list, tuple)) and len(value) in (3, 4)
        and all(isinstance(c, int) and 0 <= c <= 255 for c in value),
        f"{path} must be a list of 3 or 4 integers in [0, 255]",
    )
    return tuple(value)


def _as_viewport(value, path):
    _require(
        isinstance(value, (list, tuple)) and len(value) == 2
        and all(isinstance(c, int) and c > 0 for c in value),
        f"{path} must be two positive integers",
    )
    return tuple(value)


def validate(settings):
    """Check ranges that the per-type conversion cannot express."""
    _require(settings.length > 0, "geometry.length must be > 0")
    _require(settings.max_iterations >= 0, "geometry.max_iterations must be >= 0")
    _require(settings.frame_rate > 0, "animation.frame_rate must be > 0")
    _require(0 < settings.transition_step <= 1, "animation.transition_step must be in (0, 1]")
    _require(settings.delay_frames >= 0, "animation.delay_frames must be >= 0")
    _require(settings.delay_step >= 0, "animation.delay_step must be >= 0")
    _require(settings.growth_factor > 1, "view.growth_factor must be > 1")
    _require(0 < settings.fit_fraction <= 1, "view.fit_fraction must be in (0, 1]")
    _require(settings.padding >= 0, "view.padding must be >= 0")
    _require(0 < settings.smoothing <= 1, "view.smoothing must be in (0, 1]")
    _require(settings.zoom_in > 0 and settings.zoom_out > 0, "view.zoom_in and view.zoom_out must be > 0")
    _require(0 < settings.min_zoom <= 1 <= settings.max_zoom, "view.min_zoom <= 1 <= view.max_zoom must hold")
    _require(settings.consolidation_threshold >= 0, "consolidation.threshold must be >= 0")
    _require(settings.consolidation_interval > 0, "consolidation.interval must be > 0")
    _require(0 < settings.min_stroke <= settings.max_stroke, "presentation.min_stroke must be in (0, max_stroke]")
    return settings


CONVERTERS = {
    "length": _as_number,
    "max_iterations": _as_int,
    "frame_rate": _as_int,
    "transition_step": _as_number,
    "delay_frames": _as_int,
    "delay_step": _as_int,
    "viewport": _as_viewport,
    "camera": lambda value, path: _as_choice(value, CAMERA_POLICIES, path),
    "growth_factor": _as_number,
    "fit_fraction": _as_number,
    "padding": _as_number,
    "smoothing": _as_number,
    "zoom_in": _as_number,
    "zoom_out": _as_number,
    "min_zoom": _as_number,
    "max_zoom": _as_number,
    "consolidate": _as_bool,
    "consolidation_threshold": _as_number,
    "consolidation_interval": _as_int,
    "stroke": lambda value, path: _as_choice(value, STROKE_POLICIES, path),
    "stroke_weight": _as_number,
    "min_stroke": _as_number,
    "max_stroke": _as_number,
    "segment_color": _as_color,
    "square_color": _as_color,
    "cull": _as_bool,
}


def settings_to_dict(settings):
    """Convert DragonSettings to a nested dictionary for YAML serialization."""
    result = {}
    for section, attributes in SECTIONS.items():
        values = {}
        for attribute in attributes:
            value = getattr(settings, attribute)
            if isinstance(value, tuple):
                value = list(value)  # YAML-friendly
            values[ATTRIBUTE_KEYS.get(attribute, attribute)] = value
        result[section] = values
    return result


def dict_to_settings(settings_dict, base=default_settings):
    """Convert a nested dictionary to DragonSettings; missing keys keep the values of `base`."""
    _require(isinstance(settings_dict, dict), "settings must be a mapping")
    updates = {}
    for section, values in settings_dict.items():
        _require(section in SECTIONS, f"unknown section: {section}")
        _require(isinstance(values, dict), f"{section} must be a mapping")
        for key, value in values.items():
            attribute = KEY_ALIASES.get((section, key), key)
            path = f"{section}.{key}"
            _require(attribute in SECTIONS[section], f"unknown setting: {path}")
            updates[attribute] = CONVERTERS[attribute](value, path)
    return validate(replace(base, **updates))


def load_settings(path):
    """Load DragonSettings from a YAML file."""
    with open(path, "r") as file:
        try:
            settings_dict = yaml.safe_load(file) or {}
        except yaml.YAMLError as error:
            raise ConfigError(f"{path} is not valid YAML: {error}") from error
    return dict_to_settings(settings_dict)


def save_settings(settings, path):
    with open(path, "w") as file:
        yaml.dump(settings_to_dict(settings), file, default_flow_style=False)
