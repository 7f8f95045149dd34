from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

from .i18n import normalize_lang
from .config.schema import GameConfig


# section -> argument names pulled from it
_SECTIONS: Dict[str, Tuple[str, ...]] = {
    "window": ("width", "height", "fps"),
    "gameplay": (
        "fall_speed",
        "spawn_interval_ms",
        "energy_threshold",
        "energy_release",
        "pulse_ms",
        "pulse_scale",
        "hit_zone_low",
        "hit_zone_high",
        "hit_reward",
        "miss_limit",
        "autoplay",
        "seed",
    ),
    "input": ("lane_keys",),
    "audio": (
        "audio_backend",
        "music",
        "volume",
        "volume_step",
        "energy_frame_size",
        "hitsound",
        "hitsound_min_interval_ms",
    ),
    "ui": ("lang", "font_path", "font_size_multiplier"),
    "debug": ("basic_debug", "quiet", "log_file"),
}


def _strip_jsonc_comments(src: str) -> str:
    # Removes //, # and /* */ comments while preserving string literals.
    out: List[str] = []
    i = 0
    n = len(src)

    in_str = False
    quote = '"'
    escape = False
    line_comment = False
    block_comment = False

    while i < n:
        ch = src[i]
        nxt = src[i + 1] if i + 1 < n else ""

        if line_comment:
            if ch == "\n":
                line_comment = False
                out.append(ch)
            i += 1
            continue

        if block_comment:
            if ch == "*" and nxt == "/":
                block_comment = False
                i += 2
            else:
                i += 1
            continue

        if in_str:
            out.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == quote:
                in_str = False
            i += 1
            continue

        if ch in ("\"", "'"):
            in_str = True
            quote = ch
        elif ch == "/" and nxt == "/":
            line_comment = True
            i += 2
            continue
        elif ch == "#":
            line_comment = True
            i += 1
            continue
        elif ch == "/" and nxt == "*":
            block_comment = True
            i += 2
            continue

        out.append(ch)
        i += 1

    return "".join(out)


def parse_config_v2(raw: str) -> Dict[str, Any]:
    data = json.loads(_strip_jsonc_comments(raw.lstrip("\ufeff")))
    if not isinstance(data, dict):
        raise ValueError("config root must be an object")
    return data


def load_config_v2(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_config_v2(f.read())


def flatten_config_v2(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten sectioned config into argument names.

    Unknown sections and keys are ignored; non-object sections count as empty.
    """
    flat: Dict[str, Any] = {}
    for section, keys in _SECTIONS.items():
        sec = cfg.get(section)
        if not isinstance(sec, dict):
            continue
        for k in keys:
            if k in sec:
                flat[k] = sec[k]
    return flat


def apply_config_v2(args: Any, flat: Dict[str, Any], argv: List[str]) -> List[str]:
    """Copy config values onto args unless the flag was given on the CLI.

    Returns:
        Names of the attributes that were set
    """
    applied: List[str] = []
    for k, v in flat.items():
        if not hasattr(args, k):
            continue
        if ("--" + k) in argv:
            continue
        setattr(args, k, v)
        applied.append(k)
    return applied


def dump_config_v2(args: Any, *, lang: Optional[str] = None) -> str:
    lng = normalize_lang(lang or getattr(args, "lang", None))
    base = GameConfig.from_args(args)

    def val(name: str, default: Any = None) -> Any:
        if hasattr(base, name):
            return getattr(base, name)
        return getattr(args, name, default)

    cfg: Dict[str, Any] = {"version": 2}
    for section, keys in _SECTIONS.items():
        sec: Dict[str, Any] = {}
        for k in keys:
            v = val(k)
            sec[k] = list(v) if isinstance(v, tuple) else v
        cfg[section] = sec
    cfg["ui"]["lang"] = lng

    if lng == "zh-CN":
        header_lines = [
            "// Beatlane 配置 v2（支持注释的 JSON）",
            "//",
            "// 基本用法：",
            "//   python3 -m beatlane --music <音频文件> --config <本文件>",
            "//   python3 -m beatlane --music <音频文件> --save_config config.jsonc",
            "//",
            "// 说明：",
            "// - 以 // 或 # 开头的行会被当作注释忽略。",
            "// - 命令行参数优先级高于配置文件。",
            "",
        ]
    else:
        header_lines = [
            "// Beatlane config v2 (JSON with comments)",
            "//",
            "// Basic usage:",
            "//   python3 -m beatlane --music <audio_file> --config <this_file>",
            "//   python3 -m beatlane --music <audio_file> --save_config config.jsonc",
            "//",
            "// Notes:",
            "// - Lines starting with // or # are comments.",
            "// - CLI args override config values.",
            "",
        ]

    body = json.dumps(cfg, ensure_ascii=False, indent=2)
    return "\n".join(header_lines) + body + "\n"
