import pytest

from tsconvert.base import Builder, Parser
from tsconvert.model import InOutParameter, Result


class _EchoParser(Parser):
    def parse(self):
        return Result(error=self.params.input_file)


class _ListBuilder(Builder):
    def __init__(self, params=None):
        super().__init__(params)
        self.built = []

    def build(self, result):
        self.built.append(result)


def test_parser_is_abstract():
    with pytest.raises(TypeError):
        Parser()


def test_builder_is_abstract():
    with pytest.raises(TypeError):
        Builder()


def test_parser_uses_params():
    parser = _EchoParser(InOutParameter(input_file="in.ts"))
    assert parser.parse().error == "in.ts"


def test_params_are_copied():
    params = InOutParameter(output_file="a")
    builder = _ListBuilder(params)
    builder.params.output_file = "b"
    assert params.output_file == "a"


def test_builder_receives_result():
    builder = _ListBuilder()
    result = Result()
    builder.build(result)
    assert builder.built == [result]