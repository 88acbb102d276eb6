import pytest

from blockheat.stage import (
    StageData,
    count_blocks,
    highscore_filename,
    load_highscore,
    load_roll_speeds,
    load_stage,
    load_stage_list,
    save_highscore,
    save_stage,
)


def _sample_grid():
    grid = [[0] * 10 for _ in range(10)]
    grid[0][0] = 5
    grid[3][4] = 11
    grid[9][9] = 12
    grid[5][2] = 13
    grid[7][7] = 17
    return grid


def test_count_blocks_counts_only_clearable_kinds():
    grid = _sample_grid()
    # 5, 12 and 13 are clearable; 11 and 17 are not
    assert count_blocks(grid) == 3


def test_count_blocks_empty_grid():
    assert count_blocks([[0] * 10 for _ in range(10)]) == 0


def test_stage_data_default_is_empty():
    stage = StageData()
    assert stage.blocks == 0
    assert stage.gravity == 0 and stage.enemy == 0
    assert len(stage.grid) == 10 and all(len(r) == 10 for r in stage.grid)


def test_stage_data_rejects_wrong_shape():
    with pytest.raises(ValueError):
        StageData([[0] * 10 for _ in range(9)])


def test_stage_round_trip(tmp_path):
    path = tmp_path / "stage1.dat"
    original = StageData(_sample_grid(), gravity=-1, enemy=2)
    save_stage(original, path)
    loaded = load_stage(path)
    assert loaded == original
    assert loaded.blocks == count_blocks(original.grid)


def test_save_stage_writes_one_value_per_line(tmp_path):
    path = tmp_path / "stage.dat"
    save_stage(StageData(_sample_grid(), gravity=1, enemy=0), path)
    lines = path.read_text().splitlines()
    assert len(lines) == 102
    assert lines[0] == "5"
    assert lines[100] == "1"
    assert lines[101] == "0"


def test_load_stage_missing_trailer_defaults(tmp_path):
    path = tmp_path / "short.dat"
    path.write_text("\n".join(["1"] * 100) + "\n")
    stage = load_stage(path)
    assert stage.gravity == 0
    assert stage.enemy == 0
    assert stage.blocks == 100


def test_load_stage_too_short(tmp_path):
    path = tmp_path / "bad.dat"
    path.write_text("1\n2\n3\n")
    with pytest.raises(ValueError):
        load_stage(path)


def test_load_stage_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_stage(tmp_path / "absent.dat")


def test_load_stage_list(tmp_path):
    path = tmp_path / "block_stage_filename.dat"
    path.write_text("3\nstage1.dat\nstage2.dat\nabcdefghijklmnopqrst\n")
    names = load_stage_list(path)
    assert names[:2] == ["stage1.dat", "stage2.dat"]
    assert names[2] == "abcdefghijklmnopqrst"[:15]
    assert len(names) == 3


def test_load_stage_list_too_few_names(tmp_path):
    path = tmp_path / "list.dat"
    path.write_text("2\nonly.dat\n")
    with pytest.raises(ValueError):
        load_stage_list(path)


def test_load_roll_speeds(tmp_path):
    path = tmp_path / "block_rollspeed.dat"
    values = [float(i) / 2 for i in range(21)]
    path.write_text("\n".join(str(v) for v in values) + "\n")
    assert load_roll_speeds(path) == values


def test_load_roll_speeds_too_short(tmp_path):
    path = tmp_path / "roll.dat"
    path.write_text("1.0 2.0\n")
    with pytest.raises(ValueError):
        load_roll_speeds(path)


def test_highscore_filenames():
    assert highscore_filename(0) == "block_normal_highscore.dat"
    assert highscore_filename(1) == "block_tamayoke_highscore.dat"


def test_highscore_filename_invalid_mode():
    with pytest.raises(ValueError):
        highscore_filename(2)


def test_highscore_round_trip(tmp_path):
    path = tmp_path / "hs.dat"
    save_highscore(path, 123456)
    assert path.read_text() == "123456"
    assert load_highscore(path) == 123456


def test_load_highscore_empty(tmp_path):
    path = tmp_path / "hs.dat"
    path.write_text("")
    with pytest.raises(ValueError):
        load_highscore(path)