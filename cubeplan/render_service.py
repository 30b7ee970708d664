from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path

from cubeplan.config import SceneConfig
from cubeplan.playback import PlaybackConfig

logger = logging.getLogger(__name__)

QUALITY_ALIASES = {
    "ql": "draft",
    "draft": "draft",
    "low": "draft",
    "qm": "standard",
    "standard": "standard",
    "medium": "standard",
    "qh": "high",
    "high": "high",
    "qk": "final",
    "final": "final",
}

QUALITY_TO_MANIM_FLAG = {
    "draft": "ql",
    "standard": "qm",
    "high": "qh",
    "final": "qk",
}

SCENE_NAME = "Solve"


@dataclass(frozen=True)
class RenderRequest:
    scene: SceneConfig = SceneConfig()
    ms_per_quarter_turn: float | None = None
    quality: str = "draft"
    play: bool = False
    manim_bin: str = "manim"
    manim_file: str = "cubist.py"
    output_dir: str = "media/solves"


def normalize_quality(raw_quality: str) -> str:
    key = raw_quality.strip().lower()
    if key not in QUALITY_ALIASES:
        supported = ", ".join(sorted(set(QUALITY_ALIASES.values())))
        raise ValueError(f"Unsupported quality: {raw_quality}. Supported: {supported}")
    return QUALITY_ALIASES[key]


def output_name_for(scene: SceneConfig) -> str:
    if scene.formula:
        slug = "".join(ch if ch.isalnum() else "_" for ch in scene.formula.replace("'", "p"))
        return "solve_" + "_".join(part for part in slug.split("_") if part)
    return f"solve_seed{scene.seed}_len{scene.length}"


def build_manim_command(
    request: RenderRequest,
    repo_root: Path,
    output_name: str,
    media_dir: Path,
) -> tuple[list[str], dict[str, str]]:
    manim_file = Path(request.manim_file)
    if not manim_file.is_absolute():
        manim_file = repo_root / manim_file

    if not manim_file.exists():
        raise FileNotFoundError(f"Manim scene file not found: {manim_file}")

    quality = normalize_quality(request.quality)
    cmd = [
        request.manim_bin,
        f"-{QUALITY_TO_MANIM_FLAG[quality]}",
        str(manim_file),
        SCENE_NAME,
        "--output_file",
        output_name,
        "--media_dir",
        str(media_dir),
    ]
    if request.play:
        cmd.insert(1, "-p")

    env = os.environ.copy()
    env[SceneConfig.ENV_SEED] = str(request.scene.seed)
    env[SceneConfig.ENV_LENGTH] = str(request.scene.length)
    if request.scene.formula:
        env[SceneConfig.ENV_FORMULA] = request.scene.formula
    else:
        env.pop(SceneConfig.ENV_FORMULA, None)
    if request.ms_per_quarter_turn is not None:
        if request.ms_per_quarter_turn <= 0:
            raise ValueError("ms_per_quarter_turn must be > 0")
        env[PlaybackConfig.ENV_MS_PER_QUARTER_TURN] = str(request.ms_per_quarter_turn)

    return cmd, env


def _move_rendered_video(temp_media_dir: Path, output_name: str, final_path: Path) -> Path:
    candidates = list(temp_media_dir.rglob(f"{output_name}.mp4"))
    if not candidates:
        raise FileNotFoundError(f"Could not find rendered file for output '{output_name}'")

    final_path.parent.mkdir(parents=True, exist_ok=True)
    if final_path.exists():
        final_path.unlink()
    shutil.move(str(candidates[0]), str(final_path))
    return final_path


def render_solve(request: RenderRequest, repo_root: Path) -> Path:
    output_name = output_name_for(request.scene)
    final_path = repo_root / request.output_dir / normalize_quality(request.quality) / f"{output_name}.mp4"

    with tempfile.TemporaryDirectory(prefix="cubeplan_render_") as tmp_dir:
        temp_media_dir = Path(tmp_dir)
        cmd, env = build_manim_command(request, repo_root, output_name, temp_media_dir)
        logger.info("Running %s", " ".join(cmd))
        subprocess.run(cmd, check=True, cwd=repo_root, env=env)
        return _move_rendered_video(temp_media_dir, output_name, final_path)
