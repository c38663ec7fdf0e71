import json

from mdtools.cli import main


def write_inputs(tmp_path, box_line="10 10 10", **overrides):
    traj = tmp_path / "traj.xyz"
    traj.write_text(f"2\n{box_line}\nA 5 5 5\nB 6.2 5 5\n")
    config = {
        "trajectory_input": str(traj),
        "atom_type_1": "A",
        "atom_type_2": "B",
        "r_max": 5.0,
        "bins": 10,
        "rdf_output": str(tmp_path / "rdf.dat"),
        "irdf_output": str(tmp_path / "irdf.dat"),
    }
    config.update(overrides)
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps(config))
    return settings_path


def test_usage_without_arguments(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().err


def test_usage_with_too_many_arguments(capsys):
    assert main(["a.json", "b.json"]) == 1
    assert "Usage" in capsys.readouterr().err


def test_missing_settings_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.json")]) == 1
    assert "Failed to open setting file" in capsys.readouterr().err


def test_invalid_settings(tmp_path, capsys):
    settings_path = write_inputs(tmp_path, r_min=6.0)
    assert main([str(settings_path)]) == 1
    assert "r_max must be greater than r_min" in capsys.readouterr().err


def test_full_run(tmp_path, capsys):
    settings_path = write_inputs(tmp_path, increment=1)
    assert main([str(settings_path)]) == 0
    out = capsys.readouterr().out
    assert "Starting RDF calculation ..." in out
    assert "RDF calculation completed successfully!" in out
    lines = (tmp_path / "rdf.dat").read_text().splitlines()
    assert lines[0] == "10  A  B"
    assert len(lines) == 12
    assert (tmp_path / "irdf.dat").read_text().splitlines()[1] == "iRDF: 0"


def test_missing_box_fails(tmp_path, capsys):
    settings_path = write_inputs(tmp_path, box_line="no box here")
    assert main([str(settings_path)]) == 1
    assert "Box information has not been read" in capsys.readouterr().err