from __future__ import annotations

from typing import Any, Dict, Optional


_TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "title": "Beatlane",
        "title.start": "SPACE / ENTER: start",
        "title.keys": "Keys: {keys}",
        "title.load_failed": "Could not load music: {reason}",
        "hud.score": "Score: {score}",
        "hud.misses": "Misses: {misses}",
        "hud.combo": "Combo: {combo}",
        "hud.time": "Time: {clock}",
        "hud.volume": "Vol {volume:d}%",
        "hud.hint": "P: pause   R: restart   -/=: volume   ESC: quit",
        "paused": "PAUSED (P to resume)",
        "game_over": "Game Over! Too many misses.",
        "game_over.stopped": "Session ended.",
        "game_over.song_end": "Song finished!",
        "game_over.result": "Score {score}   Max combo {max_combo}",
        "game_over.accuracy": "Accuracy {ratio:d}%",
        "game_over.again": "SPACE / ENTER: back to title",
    },
    "zh-CN": {
        "title": "Beatlane",
        "title.start": "空格 / 回车：开始",
        "title.keys": "按键：{keys}",
        "title.load_failed": "无法加载音乐：{reason}",
        "hud.score": "分数：{score}",
        "hud.misses": "失误：{misses}",
        "hud.combo": "连击：{combo}",
        "hud.time": "时间：{clock}",
        "hud.volume": "音量 {volume:d}%",
        "hud.hint": "P：暂停   R：重来   -/=：音量   ESC：退出",
        "paused": "已暂停（按 P 继续）",
        "game_over": "游戏结束！失误太多。",
        "game_over.stopped": "本局已结束。",
        "game_over.song_end": "曲目结束！",
        "game_over.result": "分数 {score}   最大连击 {max_combo}",
        "game_over.accuracy": "命中率 {ratio:d}%",
        "game_over.again": "空格 / 回车：返回标题",
    },
}


def normalize_lang(lang: Optional[str]) -> str:
    if not lang:
        return "en"
    s = str(lang).strip()
    if not s:
        return "en"
    low = s.lower()
    if low in {"zh", "zh-cn", "zh_cn", "cn"}:
        return "zh-CN"
    if low in {"en", "en-us", "en_us", "us"}:
        return "en"
    return s


def tr(lang: str, key: str, default: Optional[str] = None, **fmt: Any) -> str:
    lng = normalize_lang(lang)
    tbl = _TRANSLATIONS.get(lng) or _TRANSLATIONS["en"]
    text = tbl.get(key)
    if text is None:
        text = _TRANSLATIONS["en"].get(key)
    if text is None:
        text = default if default is not None else key
    return text.format(**fmt) if fmt else text


def pick_lang_from_config(cfg_v2_raw: Optional[Dict[str, Any]]) -> Optional[str]:
    if not isinstance(cfg_v2_raw, dict):
        return None
    ui = cfg_v2_raw.get("ui")
    if not isinstance(ui, dict):
        return None
    v = ui.get("lang")
    if v is None:
        return None
    return str(v)
