import pytest

from hyperfn import hyper, hyper_store


@pytest.fixture
def calls():
    """Records every handler invocation as (args, context)."""
    return []


@pytest.fixture
def add_two(calls):
    def handler(args, context):
        calls.append((args, context))
        return args.a + args.b

    return hyper(
        description="Add two numbers together",
        args={"a": float, "b": float},
        handler=handler,
    )


@pytest.fixture
def store(add_two):
    return hyper_store({"add_two": add_two})
