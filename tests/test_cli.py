import pytest

from mrprime.cli import main
from mrprime.witnesses import DETERMINISTIC_LIMIT


def test_prime_in_deterministic_range(capsys):
    assert main(["test", "104729"]) == 0
    assert capsys.readouterr().out.strip() == "104729: prime (deterministic)"


def test_composite(capsys):
    assert main(["test", "561"]) == 0
    assert "561: composite" in capsys.readouterr().out


def test_random_mode_reports_rounds(capsys):
    assert main(["test", str(2**127 - 1), "--rounds", "12"]) == 0
    assert "probably prime (random, k=12)" in capsys.readouterr().out


def test_hex_input(capsys):
    main(["test", "0x65"])
    assert capsys.readouterr().out.startswith("101: prime")


def test_rounds_default_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("MRPRIME_ROUNDS", "7")
    main(["test", str(DETERMINISTIC_LIMIT + 2)])
    assert "k=7" in capsys.readouterr().out


def test_bad_integer_is_usage_error(capsys):
    with pytest.raises(SystemExit) as info:
        main(["test", "12.5"])
    assert info.value.code == 2
    assert "not an integer" in capsys.readouterr().err


def test_bad_config_is_reported(monkeypatch, capsys):
    monkeypatch.setenv("MRPRIME_ROUNDS", "zero")
    assert main(["test", "7"]) == 2
    assert "bad mrprime configuration" in capsys.readouterr().err


def test_genprime(capsys):
    assert main(["genprime", "--bits", "64", "--rounds", "10"]) == 0
    out = capsys.readouterr().out
    assert "Prime (64 bits)" in out
    assert "bit_length=64  MR(10)=True" in out


def test_safeprime(capsys):
    assert main(["safeprime", "--bits", "32"]) == 0
    out = capsys.readouterr().out
    p = int(out.strip().splitlines()[-1])
    assert p.bit_length() == 32


def test_genprime_too_small(capsys):
    assert main(["genprime", "--bits", "1"]) == 2
    assert "bits must be >= 2" in capsys.readouterr().err


def test_bench(capsys):
    assert main(["bench", "--bits", "32", "--count", "2"]) == 0
    assert "Generated 2 primes of 32 bits" in capsys.readouterr().out
