# RasterStag Filters - Base Classes
"""
Base classes for the filter system.

Every filter is a dataclass. Filters can be converted to and from plain
dictionaries and have a compact text form, so pipelines can be given on the
command line:

    'gray'
    'gradient horizontal wrap'
    'maxrange strict=false'
    'maxrange(false)'
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, field, MISSING
from enum import Enum
from typing import Any, ClassVar, TYPE_CHECKING
import re

if TYPE_CHECKING:
    from rasterstag.image import Image


@dataclass
class FilterContext:
    """Values shared between the stages of a pipeline run.

    The max-range filter for example stores the intensity range it found
    under 'intensity_range'.
    """

    data: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.data[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self.data


FILTER_REGISTRY: dict[str, type['Filter']] = {}
"Filter classes by class name and by lower case class name"

FILTER_ALIASES: dict[str, tuple[type['Filter'], dict[str, Any]]] = {}
"Short names mapped to a filter class and its preset parameters"


def register_filter(cls: type['Filter']) -> type['Filter']:
    """Decorator adding a filter class to the registry."""
    FILTER_REGISTRY[cls.__name__] = cls
    FILTER_REGISTRY[cls.__name__.lower()] = cls
    return cls


def register_alias(alias: str, cls: type['Filter'], **preset: Any) -> None:
    """Register a short name for a filter, optionally with preset parameters.

    Examples:
        register_alias('gray', Grayscale)
        register_alias('vgrad', Gradient, kernel='vertical')
    """
    FILTER_ALIASES[alias.lower()] = (cls, preset)


def _lookup_filter(name: str) -> tuple[type['Filter'], dict[str, Any]]:
    """Resolve a filter or alias name to its class and preset parameters."""
    name = name.lower()
    if name in FILTER_ALIASES:
        filter_cls, preset = FILTER_ALIASES[name]
        return filter_cls, dict(preset)
    if name in FILTER_REGISTRY:
        return FILTER_REGISTRY[name], {}
    raise ValueError(f"Unknown filter: {name}")


def _public_fields(filter_cls) -> list:
    """Dataclass fields which are filter parameters."""
    return [f for f in fields(filter_cls) if not f.name.startswith('_') and f.name != 'inputs']


def _plain_value(value: Any) -> Any:
    """Convert enums and tuples to values which serialize as JSON."""
    if isinstance(value, Enum):
        return value.value if isinstance(value.value, str) else value.name.lower()
    if isinstance(value, tuple):
        return list(value)
    return value


@dataclass
class Filter(ABC):
    """Base class for all filters.

    Example:
        @register_filter
        @dataclass
        class Invert(Filter):
            def apply(self, image: Image, context: FilterContext | None = None) -> Image:
                ...
    """

    # parameter a single unnamed argument of the parentheses syntax is bound to
    _primary_param: ClassVar[str | None] = None

    @abstractmethod
    def apply(self, image: 'Image', context: FilterContext | None = None) -> 'Image':
        """Apply the filter.

        :param image: The input image. It is never modified.
        :param context: Optional values shared with the other pipeline stages
        :returns: A newly allocated image
        """

    def __call__(self, image: 'Image', context: FilterContext | None = None) -> 'Image':
        return self.apply(image, context)

    @property
    def type(self) -> str:
        """Filter type name used in dictionaries."""
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        """Serialize the filter parameters and its type."""
        data = {f.name: _plain_value(getattr(self, f.name)) for f in fields(self)
                if not f.name.startswith('_')}
        data['type'] = self.type
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Filter':
        """Create a filter from a dictionary as returned by :meth:`to_dict`."""
        params = dict(data)
        filter_type = params.pop('type', cls.__name__)
        filter_cls = FILTER_REGISTRY.get(filter_type) or FILTER_REGISTRY.get(filter_type.lower())
        if filter_cls is None:
            raise ValueError(f"Unknown filter type: {filter_type}")
        return filter_cls(**params)

    @classmethod
    def parse(cls, text: str) -> 'Filter':
        """Parse a single filter from its text form.

        Space separated: a name followed by positional arguments (bound in
        field order) and key=value pairs, e.g. 'gradient horizontal wrap'.

        Parentheses: 'maxrange(false)' or 'gradient(kernel=vertical,policy=black)'.
        A single unnamed argument is bound to the filter's primary parameter.
        """
        text = text.strip()
        match = re.match(r'^(\w+)\(([^)]*)\)$', text)
        if match:
            return cls._parse_parentheses(match.group(1), match.group(2))

        parts = _split_filter_args(text)
        if not parts:
            raise ValueError(f"Invalid filter format: {text}")
        filter_cls, params = _lookup_filter(parts[0])
        positional = []
        for arg in parts[1:]:
            if '=' in arg:
                key, value = arg.split('=', 1)
                params[key.strip()] = _parse_value(value)
            else:
                positional.append(_parse_value(arg))

        names = [f.name for f in _public_fields(filter_cls)]
        if len(positional) > len(names):
            raise ValueError(
                f"Too many positional args for {filter_cls.__name__}: "
                f"got {len(positional)}, max {len(names)}"
            )
        for name, value in zip(names, positional):
            params.setdefault(name, value)
        return filter_cls(**params)

    @classmethod
    def _parse_parentheses(cls, name: str, args: str) -> 'Filter':
        filter_cls, params = _lookup_filter(name)
        for index, arg in enumerate(a.strip() for a in args.split(',')):
            if not arg:
                continue
            if '=' in arg:
                key, value = arg.split('=', 1)
                params[key.strip()] = _parse_value(value)
            elif index == 0 and filter_cls._primary_param:
                params[filter_cls._primary_param] = _parse_value(arg)
            else:
                raise ValueError(f"Positional arg not supported for {name}: {arg}")
        return filter_cls(**params)

    def to_string(self) -> str:
        """Text form listing every parameter which differs from its default.

        Example:
            'gradient kernel=horizontal policy=wrap'
        """
        parts = [self.type.lower()]
        for f in _public_fields(self):
            value = getattr(self, f.name)
            if f.default is not MISSING and value == f.default:
                continue
            value = _plain_value(value)
            if isinstance(value, bool):
                text = 'true' if value else 'false'
            elif isinstance(value, list):
                text = ','.join(str(v) for v in value)
            elif isinstance(value, str) and (' ' in value or '=' in value):
                text = f"'{value}'"
            else:
                text = str(value)
            parts.append(f"{f.name}={text}")
        return ' '.join(parts)


def _parse_value(text: str) -> int | float | bool | str:
    """Convert an argument to bool, int or float where possible.

    Quoted arguments always stay strings.
    """
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in '"\'':
        return text[1:-1]
    if text.lower() in ('true', 'false'):
        return text.lower() == 'true'
    for convert in (int, float):
        try:
            return convert(text)
        except ValueError:
            pass
    return text


def _split_filter_args(text: str) -> list[str]:
    """Split at whitespace outside of quotes.

    Example:
        'gradient policy="wrap"' -> ['gradient', 'policy="wrap"']
    """
    return re.findall(r'''(?:[^\s'"]|'[^']*'|"[^"]*")+''', text)


__all__ = [
    'Filter',
    'FilterContext',
    'FILTER_REGISTRY',
    'FILTER_ALIASES',
    'register_filter',
    'register_alias',
]
