"""
Render configuration: defaults, optional book.yaml, environment, CLI overrides.

Resolved once at startup into an immutable BookConfig.
"""

import copy
import os
from types import MappingProxyType

import yaml

from pdfbook.errors import ConfigError


CONFIG_FILE = "book.yaml"

# Defaults applied if missing
DEFAULTS = {
    "output": "权力48法则byGPT5.pdf",
    "fonts": {
        "main": "SimSun",
        "sans": "Microsoft YaHei",
        "mono": "Consolas",
    },
    "fontsize": "12pt",
    "header": "pandoc_header.tex",
    "hard_line_breaks": False,
    "include_categories": False,
    "index": {
        "file": "README.md",
        "heading": "索引",
    },
    "chapter_prefix": "law",
    "book_md": "__book__.md",
    "pdf": {
        "engine": "xelatex",
        "margin": "2.2cm",
        "papersize": "a4",
        "linestretch": "1.25",
    },
}

# Environment variable → config key path
ENV_VARS = {
    "OUT": ("output",),
    "CJK_MAINFONT": ("fonts", "main"),
    "CJK_SANSFONT": ("fonts", "sans"),
    "CJK_MONOFONT": ("fonts", "mono"),
    "FONTSIZE": ("fontsize",),
    "HEADER_TEX": ("header",),
}

# Environment flags: on only for the exact value "1"
ENV_FLAGS = {
    "MD_HARD_LINE_BREAKS": "hard_line_breaks",
    "BOOK_INCLUDE_CATEGORIES": "include_categories",
}

FLAG_KEYS = ("hard_line_breaks", "include_categories")


def _merge(base, extra):
    """Recursively merge mapping `extra` into `base` (in place)."""
    for key, value in extra.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def _freeze(value):
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def _as_flag(value):
    return value is True or str(value).strip() == "1"


def load_yaml(path):
    """Load a book.yaml file. Returns {} if it does not exist."""
    if not os.path.exists(path):
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE} must be a YAML mapping, got {type(data).__name__}")

    for section in ("fonts", "index", "pdf"):
        if section in data and not isinstance(data[section], dict):
            raise ConfigError(f"{CONFIG_FILE}: '{section}' must be a mapping")

    return data


class BookConfig:
    """
    Loaded, immutable render configuration.

    Usage:
        config = BookConfig.load(project_dir)
        config.output              # "权力48法则byGPT5.pdf"
        config.fonts["main"]       # "SimSun"
        config.include_categories  # False
    """

    def __init__(self, data, project_dir):
        object.__setattr__(self, "_data", _freeze(data))
        object.__setattr__(self, "project_dir", project_dir)

    @classmethod
    def load(cls, project_dir=".", environ=None, overrides=None):
        """
        Resolve configuration for a project directory.

        Precedence (highest first): overrides, environment, book.yaml, defaults.
        `overrides` keys with a None value are ignored.
        """
        if environ is None:
            environ = os.environ
        project_dir = os.path.abspath(project_dir)

        data = copy.deepcopy(DEFAULTS)
        _merge(data, load_yaml(os.path.join(project_dir, CONFIG_FILE)))

        for var, path in ENV_VARS.items():
            value = environ.get(var)
            if not value:
                continue
            target = data
            for key in path[:-1]:
                target = target[key]
            target[path[-1]] = value

        for var, key in ENV_FLAGS.items():
            if var in environ:
                data[key] = environ[var] == "1"

        for key, value in (overrides or {}).items():
            if value is not None:
                data[key] = value

        for key in FLAG_KEYS:
            data[key] = _as_flag(data[key])

        return cls(data, project_dir)

    # ── Attribute access ───────────────────────────────────

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(f"BookConfig has no field '{name}'")

    def __setattr__(self, name, value):
        raise AttributeError("BookConfig is immutable")

    # ── Convenience ────────────────────────────────────────

    def path(self, value):
        """Resolve a configured path against the project directory."""
        return os.path.join(self.project_dir, value)

    @property
    def from_str(self):
        """The pandoc --from string including extensions."""
        fmt = "markdown+raw_tex"
        if self.hard_line_breaks:
            fmt += "+hard_line_breaks"
        return fmt

    @property
    def toc_depth(self):
        return 2 if self.include_categories else 1

    def variable_args(self):
        """Build pandoc -V arguments list."""
        pdf = self.pdf
        fonts = self.fonts
        pairs = [
            ("fontsize", self.fontsize),
            ("geometry:margin", pdf["margin"]),
            ("papersize", pdf["papersize"]),
            ("linestretch", pdf["linestretch"]),
            ("CJKmainfont", fonts.get("main")),
            ("CJKsansfont", fonts.get("sans")),
            ("CJKmonofont", fonts.get("mono")),
        ]
        args = []
        for key, value in pairs:
            if value:
                args.extend(["-V", f"{key}={value}"])
        return args

    def summary(self):
        """Print a short config summary."""
        print(f"\n  Output:     {self.output}")
        print(f"  Source:     {self.project_dir}")
        print(f"  Fonts:      {self.fonts['main']} / {self.fonts['sans']} / {self.fonts['mono']}")
        print(f"  Font size:  {self.fontsize}")
        if self.include_categories:
            print("  Categories: on")
        if self.hard_line_breaks:
            print("  Hard line breaks: on")
