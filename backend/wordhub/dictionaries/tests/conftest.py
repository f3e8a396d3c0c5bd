import pytest

# 错误响应中允许为空的必需容器字段
REQUIRED_LISTS = {"entries"}


def _walk(value, path):
    if isinstance(value, dict):
        for key, item in value.items():
            child = f"{path}.{key}"
            assert item is not None, f"{child} is None"
            assert item != "", f"{child} is an empty string"
            if key not in REQUIRED_LISTS:
                assert item != [] and item != {}, f"{child} is empty"
            _walk(item, child)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _walk(item, f"{path}[{index}]")


@pytest.fixture
def assert_sparse():
    """检查序列化后的响应：可选字段要么不出现，要么非空"""
    def check(response):
        _walk(response.to_dict(), "response")
    return check
