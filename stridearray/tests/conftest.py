import pytest

from stridearray.config import config


@pytest.fixture(autouse=True)
def reset_config():
    yield
    config.reset()


@pytest.fixture(params=["warn", "raise"])
def mismatch_policy(request):
    with config.set({"matrix.on_mismatch": request.param}):
        yield request.param


@pytest.fixture(params=[False, True])
def boundscheck(request):
    return request.param
