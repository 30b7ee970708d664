from __future__ import annotations

import pytest

import scripts.patch_manim_rubikscube as patch_script
import scripts.plan_solve as plan_solve
from cubeplan.facelets import to_facelets
from cubeplan.notation import invert_moves
from cubeplan.planner import plan_cfop
from cubeplan.solver import CannedSolver
from cubeplan.state import scramble_from_moves


def test_format_plan_groups_steps_by_chunk() -> None:
    scramble = scramble_from_moves(["R", "F"])
    solver = CannedSolver({to_facelets(scramble.state): " ".join(invert_moves(scramble.moves))})
    lines = plan_solve.format_plan(plan_cfop(scramble.state, solver))

    assert lines[0] == "Cross (2 moves)"
    assert lines[1] == "  [Cross: place G edge]"
    assert lines[2].split()[0] == "F'"
    assert lines[3] == "  [Cross: place R edge]"
    assert lines[-1] == "Solution: F' R'"


def test_plan_solve_cli_prints_a_solving_plan(capsys: pytest.CaptureFixture[str]) -> None:
    pytest.importorskip("kociemba")

    assert plan_solve.main(["--formula", "R U R' U'"]) == 0

    output = capsys.readouterr().out
    assert output.startswith("Scramble: R U R' U'")
    assert "Solution:" in output


def test_self_check_flag_exits_cleanly(capsys: pytest.CaptureFixture[str]) -> None:
    pytest.importorskip("kociemba")

    assert plan_solve.main(["--self-check"]) == 0
    assert "0 failed" in capsys.readouterr().out


def test_patch_rewrites_import_once(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    cubie = tmp_path / "cubie.py"
    cubie.write_text(f"{patch_script.OLD}\n", encoding="utf-8")
    monkeypatch.setattr(patch_script, "locate_cubie_module", lambda: cubie)

    assert patch_script.patch(check_only=True) == 1
    assert patch_script.patch() == 0
    assert cubie.read_text(encoding="utf-8") == f"{patch_script.NEW}\n"
    assert patch_script.patch() == 0


def test_patch_reports_missing_package(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(patch_script, "locate_cubie_module", lambda: None)
    assert patch_script.patch() == 1
