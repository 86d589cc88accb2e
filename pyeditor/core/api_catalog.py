"""The MicroPython API available on the micro:bit, as static catalogs.

The catalogs are written as plain nested literals, which is how they are
maintained by hand:

* a ``list`` holds the members (functions, constants) of a module or class,
* a ``dict`` maps sub-module or class names to their own entries,
* an empty string marks a bare name with nothing to enumerate (for example a
  function such as ``microbit.sleep``).

At import time they are converted into immutable :class:`Members`,
:class:`Submodules` and :class:`Bare` nodes. ``BASE_API`` is available on
every board, ``EXTRA_MODULES`` only on boards with the full API.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterator, Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class Members:
    """A module or class whose members are plain names."""
    names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Submodules:
    """A module containing named sub-modules or classes."""
    children: Mapping[str, "ApiNode"] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class Bare:
    """A name with no enumerable members."""


ApiNode = Union[Members, Submodules, Bare]

BARE = Bare()

_PIN_TOUCH_ANALOG = [
    "is_touched", "read_analog", "read_digital", "set_analog_period",
    "set_analog_period_microseconds", "write_analog", "write_digital",
]
_PIN_ANALOG = [
    "read_analog", "read_digital", "set_analog_period",
    "set_analog_period_microseconds", "write_analog", "write_digital",
]
_PIN_DIGITAL = ["read_digital", "write_digital"]
_TIME = ["sleep", "sleep_ms", "sleep_us", "ticks_ms", "ticks_us", "ticks_add", "ticks_diff"]
_COLLECTIONS = ["namedtuple", "OrderedDict"]
_STRUCT = ["calcsize", "pack", "pack_into", "unpack", "unpack_from"]

_BASE_API_SOURCE: Dict[str, Any] = {
    "microbit": {
        "Image": [
            "ALL_CLOCKS", "ANGRY", "ARROW_E", "ARROW_N", "ARROW_NE", "ARROW_NW",
            "ARROW_S", "ARROW_SE", "ARROW_SW", "ARROW_W", "ASLEEP", "BUTTERFLY",
            "CHESSBOARD", "CLOCK1", "CLOCK10", "CLOCK11", "CLOCK12", "CLOCK2",
            "CLOCK3", "CLOCK4", "CLOCK5", "CLOCK6", "CLOCK7", "CLOCK8", "CLOCK9",
            "CONFUSED", "COW", "DIAMOND", "DIAMOND_SMALL", "DUCK", "FABULOUS",
            "GHOST", "GIRAFFE", "HAPPY", "HEART", "HEART_SMALL", "HOUSE", "MEH",
            "MUSIC_CROTCHET", "MUSIC_QUAVER", "MUSIC_QUAVERS", "NO", "PACMAN",
            "PITCHFORK", "RABBIT", "ROLLERSKATE", "SAD", "SILLY", "SKULL",
            "SMILE", "SNAKE", "SQUARE", "SQUARE_SMALL", "STICKFIGURE",
            "SURPRISED", "SWORD", "TARGET", "TORTOISE", "TRIANGLE",
            "TRIANGLE_LEFT", "TSHIRT", "UMBRELLA", "XMAS", "YES",
        ],
        "pin0": _PIN_TOUCH_ANALOG,
        "pin1": _PIN_TOUCH_ANALOG,
        "pin2": _PIN_TOUCH_ANALOG,
        "pin3": _PIN_ANALOG,
        "pin4": _PIN_ANALOG,
        "pin5": _PIN_DIGITAL,
        "pin6": _PIN_DIGITAL,
        "pin7": _PIN_DIGITAL,
        "pin8": _PIN_DIGITAL,
        "pin9": _PIN_DIGITAL,
        "pin10": _PIN_ANALOG,
        "pin11": _PIN_DIGITAL,
        "pin12": _PIN_DIGITAL,
        "pin13": _PIN_DIGITAL,
        "pin14": _PIN_DIGITAL,
        "pin15": _PIN_DIGITAL,
        "pin16": _PIN_DIGITAL,
        "pin19": _PIN_DIGITAL,
        "pin20": _PIN_DIGITAL,
        "accelerometer": [
            "current_gesture", "get_gestures", "get_values", "get_x", "get_y",
            "get_z", "was_gesture",
        ],
        "button_a": ["get_presses", "is_pressed", "was_pressed"],
        "button_b": ["get_presses", "is_pressed", "was_pressed"],
        "compass": [
            "calibrate", "clear_calibration", "get_field_strength", "get_x",
            "get_y", "get_z", "heading", "is_calibrated",
        ],
        "display": [
            "clear", "get_pixel", "is_on", "off", "on", "read_light_level",
            "scroll", "set_pixel", "show",
        ],
        "i2c": ["init", "read", "scan", "write"],
        "panic": "",
        "reset": "",
        "running_time": "",
        "sleep": "",
        "spi": ["init", "read", "write", "write_readinto"],
        "temperature": "",
        "uart": ["any", "init", "read", "readall", "readline", "write"],
    },
    "audio": ["play", "AudioFrame"],
    "machine": ["disable_irq", "enable_irq", "freq", "reset", "time_pulse_us", "unique_id"],
    "micropython": [
        "const", "heap_lock", "heap_unlock", "kbd_intr", "mem_info",
        "opt_level", "qstr_info", "stack_use",
    ],
    "music": [
        "BADDY", "BA_DING", "BIRTHDAY", "BLUES", "CHASE", "DADADADUM",
        "ENTERTAINER", "FUNERAL", "FUNK", "JUMP_DOWN", "JUMP_UP", "NYAN", "ODE",
        "POWER_DOWN", "POWER_UP", "PRELUDE", "PUNCHLINE", "PYTHON", "RINGTONE",
        "WAWAWAWAA", "WEDDING", "get_tempo", "pitch", "play", "reset",
        "set_temp", "stop",
    ],
    "speech": ["pronounce", "say", "sing", "translate"],
    "radio": [
        "RATE_1MBIT", "RATE_250KBIT", "RATE_2MBIT", "config", "off", "on",
        "receive", "receive_bytes", "receive_bytes_into", "receive_full",
        "reset", "send", "send_bytes",
    ],
    "os": ["remove", "listdir", "size", "uname"],
    "time": _TIME,
    "utime": _TIME,
    "ucollections": _COLLECTIONS,
    "collections": _COLLECTIONS,
    "array": ["array"],
    "math": [
        "e", "pi", "sqrt", "pow", "exp", "log", "cos", "sin", "tan", "acos",
        "asin", "atan", "atan2", "ceil", "copysign", "fabs", "floor", "fmod",
        "frexp", "ldexp", "modf", "isfinite", "isinf", "isnan", "trunc",
        "radians", "degrees",
    ],
    "random": ["getrandbits", "seed", "randrange", "randint", "choice", "random", "uniform"],
    "ustruct": _STRUCT,
    "struct": _STRUCT,
    "sys": [
        "version", "version_info", "implementation", "platform", "byteorder",
        "exit", "print_exception",
    ],
    "gc": ["collect", "disable", "enable", "isenabled", "mem_free", "mem_alloc", "threshold"],
    "neopixel": {
        "NeoPixel": ["clear", "show"],
    },
}

# Only available on V2 boards
_EXTRA_MODULES_SOURCE: Dict[str, Any] = {
    "microbit": {
        "microphone": [
            "LOUD", "QUIET", "current_sound", "get_sounds", "is_sound",
            "sound_level", "was_sound",
        ],
        "pin_logo": ["is_touched"],
        "pin_speaker": [
            "get_analog_period_microseconds", "get_mode", "get_pull",
            "read_digital", "set_analog_period",
            "set_analog_period_microseconds", "set_pull", "write_analog",
            "write_digital",
        ],
    },
}


def build_node(raw: Any) -> ApiNode:
    """Convert a literal catalog entry into an :data:`ApiNode`."""
    if isinstance(raw, (list, tuple)):
        return Members(tuple(raw))
    if isinstance(raw, dict):
        return Submodules(MappingProxyType({name: build_node(value) for name, value in raw.items()}))
    if raw == "" or raw is None:
        return BARE
    raise TypeError(f"Unsupported catalog entry: {raw!r}")


def merge_catalogs(base: ApiNode, extra: ApiNode) -> ApiNode:
    """Recursively union two catalogs.

    Sub-module mappings are merged key by key. For any other collision the
    node from ``extra`` replaces the one from ``base``.
    """
    if isinstance(base, Submodules) and isinstance(extra, Submodules):
        merged: Dict[str, ApiNode] = dict(base.children)
        for name, node in extra.children.items():
            if name in merged:
                merged[name] = merge_catalogs(merged[name], node)
            else:
                merged[name] = node
        return Submodules(MappingProxyType(merged))
    return extra


def iter_paths(node: ApiNode, prefix: Tuple[str, ...] = ()) -> Iterator[Tuple[str, ...]]:
    """Yield the path of every name reachable in ``node``, at any depth."""
    if isinstance(node, Submodules):
        for name, child in node.children.items():
            path = prefix + (name,)
            yield path
            yield from iter_paths(child, path)
    elif isinstance(node, Members):
        for name in node.names:
            yield prefix + (name,)


def extra_only_paths(base: Optional[ApiNode] = None, extra: Optional[ApiNode] = None) -> FrozenSet[str]:
    """Dotted names that only exist in the extra catalog."""
    base = BASE_API if base is None else base
    extra = EXTRA_MODULES if extra is None else extra
    base_paths = set(iter_paths(base))
    return frozenset(
        ".".join(path) for path in iter_paths(extra) if path not in base_paths
    )


BASE_API: Submodules = build_node(_BASE_API_SOURCE)
EXTRA_MODULES: Submodules = build_node(_EXTRA_MODULES_SOURCE)
FULL_API: Submodules = merge_catalogs(BASE_API, EXTRA_MODULES)
EXTRA_ONLY_NAMES: FrozenSet[str] = extra_only_paths(BASE_API, EXTRA_MODULES)

__all__ = [
    "ApiNode",
    "Members",
    "Submodules",
    "Bare",
    "BASE_API",
    "EXTRA_MODULES",
    "FULL_API",
    "EXTRA_ONLY_NAMES",
    "build_node",
    "merge_catalogs",
    "iter_paths",
    "extra_only_paths",
]
