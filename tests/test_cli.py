from sbhaco.cli import main

INSTANCE = """# tiny
5
3
ACG
0
0
0
ACG
CGT
GTA
"""


def _write(tmp_path, instance_text, original_text):
    instance = tmp_path / "instance.txt"
    original = tmp_path / "original.txt"
    instance.write_text(instance_text, encoding="utf-8")
    original.write_text(original_text, encoding="utf-8")
    return str(instance), str(original)


def test_usage_on_wrong_arguments(capsys):
    assert main(["only-one"]) == 1
    assert "Usage:" in capsys.readouterr().out


def test_solves_and_scores(tmp_path, capsys):
    instance, original = _write(tmp_path, INSTANCE, "ACGTA\n")
    assert main([instance, original]) == 0
    out = capsys.readouterr().out
    assert "Reconstructed: ACGTA..." in out
    assert "Levenshtein score: 0" in out
    assert "Average Levenshtein score: 0" in out
    assert "Total instances: 1" in out


def test_count_mismatch(tmp_path, capsys):
    instance, original = _write(tmp_path, INSTANCE, "ACGTA\nTTTTT\n")
    assert main([instance, original]) == 1
    assert "doesn't match" in capsys.readouterr().err


def test_missing_instance_file(tmp_path, capsys):
    original = tmp_path / "original.txt"
    original.write_text("ACGTA\n", encoding="utf-8")
    assert main([str(tmp_path / "absent.txt"), str(original)]) == 1
    assert "ERROR" in capsys.readouterr().err


def test_bad_kmer_length_fails(tmp_path, capsys):
    broken = INSTANCE.replace("GTA\n", "GT\n")
    instance, original = _write(tmp_path, broken, "ACGTA\n")
    assert main([instance, original]) == 1
    assert "Invalid k-mer length" in capsys.readouterr().err