from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, List, Optional

from .config.schema import GameConfig
from .config_v2 import apply_config_v2, dump_config_v2, flatten_config_v2, load_config_v2
from .i18n import normalize_lang, pick_lang_from_config, tr
from .logging_setup import setup_logging


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="beatlane", description="Four-lane rhythm game driven by music energy")

    g_in = ap.add_argument_group("Input")
    g_in.add_argument("--music", type=str, default=None, help="Music file (wav / ogg / flac)")
    g_in.add_argument("--lane_keys", type=str, default=None, help="Comma separated key names, default a,s,d,f")

    g_cfg = ap.add_argument_group("Config")
    g_cfg.add_argument("--config", type=str, default=None, help="Config v2 (JSONC) path")
    g_cfg.add_argument("--save_config", type=str, default=None, help="Write config v2 (JSONC) to this path and exit")

    g_win = ap.add_argument_group("Window")
    g_win.add_argument("--width", type=int, default=None)
    g_win.add_argument("--height", type=int, default=None, help="Also the playfield's far edge")
    g_win.add_argument("--fps", type=int, default=None)

    g_play = ap.add_argument_group("Gameplay")
    g_play.add_argument("--fall_speed", type=float, default=None, help="Pixels per frame")
    g_play.add_argument("--spawn_interval_ms", type=float, default=None)
    g_play.add_argument("--energy_threshold", type=float, default=None)
    g_play.add_argument("--energy_release", type=float, default=None)
    g_play.add_argument("--pulse_ms", type=float, default=None)
    g_play.add_argument("--pulse_scale", type=float, default=None)
    g_play.add_argument("--hit_zone_low", type=float, default=None)
    g_play.add_argument("--hit_zone_high", type=float, default=None)
    g_play.add_argument("--hit_reward", type=int, default=None)
    g_play.add_argument("--miss_limit", type=int, default=None)
    g_play.add_argument("--autoplay", action="store_true")
    g_play.add_argument("--autostart", action="store_true", help="Skip the title screen")
    g_play.add_argument("--seed", type=int, default=None)

    g_audio = ap.add_argument_group("Audio")
    g_audio.add_argument("--audio_backend", type=str, default="pygame", choices=["pygame"])
    g_audio.add_argument("--volume", type=float, default=None, help="0..1, default 0.3")
    g_audio.add_argument("--volume_step", type=float, default=None)
    g_audio.add_argument("--energy_frame_size", type=int, default=None)
    g_audio.add_argument("--hitsound", type=str, default=None)
    g_audio.add_argument("--hitsound_min_interval_ms", type=int, default=None)

    g_ui = ap.add_argument_group("UI")
    g_ui.add_argument("--lang", type=str, default=None, help="Language: zh-CN / en")
    g_ui.add_argument("--font_path", type=str, default=None)
    g_ui.add_argument("--font_size_multiplier", type=float, default=1.0)

    g_dbg = ap.add_argument_group("Debug")
    g_dbg.add_argument("--quiet", action="store_true", help="Less console output")
    g_dbg.add_argument("--basic_debug", action="store_true")
    g_dbg.add_argument("--log_file", type=str, default=None)

    return ap


def main(argv: Optional[List[str]] = None) -> Any:
    argv = list(sys.argv[1:] if argv is None else argv)
    args = build_parser().parse_args(argv)

    cfg_raw = None
    config_error: Optional[str] = None
    if args.config:
        try:
            cfg_raw = load_config_v2(str(args.config))
            apply_config_v2(args, flatten_config_v2(cfg_raw), argv)
        except (OSError, ValueError) as e:
            config_error = str(e)

    setup_logging(args)
    logger = logging.getLogger(__name__)
    if config_error is not None:
        logger.warning("ignoring config %s: %s", args.config, config_error)

    lang = getattr(args, "lang", None) or pick_lang_from_config(cfg_raw)
    lang = normalize_lang(lang)

    if args.save_config:
        with open(args.save_config, "w", encoding="utf-8") as f:
            f.write(dump_config_v2(args, lang=lang))
        logger.info("config written to %s", args.save_config)
        return None

    try:
        config = GameConfig.from_args(args).validate()
    except (TypeError, ValueError) as e:
        raise SystemExit(f"invalid configuration: {e}")

    if not args.music:
        raise SystemExit("--music must be provided (or set audio.music in --config)")

    logger.info(tr(lang, "title"))
    logger.info("music: %s", args.music)
    logger.info("window: %dx%d @ %d fps", config.width, config.height, config.fps)
    logger.info("lanes: %s  autoplay: %s", ",".join(config.lane_keys), "on" if args.autoplay else "off")

    # imported late so --save_config works without a display stack
    from .backends.pygame.session import PygameSession

    session = PygameSession(
        config,
        music_path=args.music,
        audio_backend=args.audio_backend,
        hitsound_path=args.hitsound,
        lang=lang,
        font_path=args.font_path,
        font_size_multiplier=args.font_size_multiplier,
        autoplay=args.autoplay,
        seed=args.seed,
        show_debug=args.basic_debug,
        autostart=args.autostart,
    )
    try:
        result = session.run()
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return None

    logger.info(
        "final score=%s misses=%s max_combo=%s",
        result.get("score"),
        result.get("misses"),
        result.get("max_combo"),
    )
    return result
