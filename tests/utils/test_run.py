# tests/utils/test_run.py

import random

import pytest

from app.utils.run import calcular_dv, es_dv_valido, es_run_valido, generar_run


@pytest.mark.parametrize(
    "run, dv",
    [
        ("12345678", "5"),
        ("11111111", "1"),
        ("6", "K"),
        ("0", "0"),
    ],
)
def test_calcular_dv(run, dv):
    assert calcular_dv(run) == dv


@pytest.mark.parametrize("run", ["", "12a4", "12.345.678"])
def test_calcular_dv_rejects_non_digits(run):
    with pytest.raises(ValueError):
        calcular_dv(run)


def test_generar_run_is_eight_digits_and_reproducible():
    runs = [generar_run(random.Random(42)) for _ in range(2)]
    assert runs[0] == runs[1]
    assert len(runs[0]) == 8
    assert es_run_valido(runs[0])


def test_calcular_dv_over_generated_runs():
    rng = random.Random(2024)
    for _ in range(500):
        run = generar_run(rng)
        dv = calcular_dv(run)
        assert len(dv) == 1
        assert dv in "0123456789K"
        assert es_dv_valido(dv)
        assert calcular_dv(run) == dv


def test_run_and_dv_formats():
    assert es_run_valido("1234567")
    assert not es_run_valido("123456")
    assert not es_run_valido("123456789")
    assert es_dv_valido("k")
    assert es_dv_valido("7")
    assert not es_dv_valido("10")
