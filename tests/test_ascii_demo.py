from brickgame.__main__ import main
from brickgame.grid import HEIGHT
from brickgame.session import GameStatus
from brickgame.snapshot import Snapshot
from brickgame.utils import render_ascii


def test_tetris_frame_shows_piece_and_preview(capsys):
    frame = main(["--game", "tetris", "--seed", "3", "--ticks", "1"])
    lines = frame.splitlines()
    assert len(lines) == HEIGHT + 1 + 4 + 1
    assert "".join(lines[:HEIGHT]).count("#") == 4
    assert "".join(lines[HEIGHT + 1:HEIGHT + 5]).count("#") == 4
    assert lines[-1].startswith("score=0 ")
    assert capsys.readouterr().out.strip() == frame


def test_snake_frame_shows_body_and_apple():
    frame = main(["--game", "snake", "--seed", "1", "--ticks", "1"])
    lines = frame.splitlines()
    assert len(lines) == HEIGHT + 1
    grid_text = "".join(lines[:HEIGHT])
    assert grid_text.count("#") == 4
    assert grid_text.count("@") == 1
    assert lines[-1].endswith("status=playing")


def test_render_without_grid_prints_only_hud():
    snapshot = Snapshot(
        grid=None,
        preview=None,
        score=1,
        high_score=2,
        level=3,
        speed=3,
        status=GameStatus.EXITED,
    )
    assert render_ascii(snapshot) == "score=1 high=2 level=3 speed=3 status=exited"
