import numpy as np
import pytest

from stridearray.config import config, parse_boundscheck, parse_mismatch_policy
from stridearray.core import NDArray
from stridearray.errors import BadConfigError, BoundsCheckError, DimensionMismatchError
from stridearray.matrix import Matrix


def test_config_defaults_set():
    assert config.get("array.dtype") == "float64"
    assert config.get("array.boundscheck") is False
    assert config.get("matrix.on_mismatch") == "warn"


def test_config_set_context():
    with config.set({"array.dtype": "int16"}):
        assert np.dtype('i2') == NDArray((2, 2)).dtype
    assert np.dtype('f8') == NDArray((2, 2)).dtype


def test_config_boundscheck():
    with config.set({"array.boundscheck": True}):
        a = NDArray((2, 2))
        assert a.boundscheck
        with pytest.raises(BoundsCheckError):
            a[0, 2]
    # explicit argument wins over the configuration
    with config.set({"array.boundscheck": True}):
        assert not NDArray((2, 2), boundscheck=False).boundscheck
    assert not NDArray((2, 2)).boundscheck


def test_config_mismatch_policy():
    a = Matrix((2, 3), fill_value=1)
    b = Matrix((2, 2), fill_value=1)
    with config.set({"matrix.on_mismatch": "raise"}):
        with pytest.raises(DimensionMismatchError):
            a * b
    with config.set({"matrix.on_mismatch": "explode"}):
        with pytest.raises(BadConfigError):
            a * b


def test_parse_mismatch_policy():
    assert "warn" == parse_mismatch_policy("warn")
    assert "raise" == parse_mismatch_policy("raise")
    with pytest.raises(BadConfigError):
        parse_mismatch_policy("ignore")


def test_parse_boundscheck():
    assert parse_boundscheck(True) is True
    assert parse_boundscheck(False) is False
    with pytest.raises(BadConfigError):
        parse_boundscheck("yes")
    with config.set({"array.boundscheck": "yes"}):
        with pytest.raises(BadConfigError):
            NDArray((2, 2))
