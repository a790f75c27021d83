import pytest

from graphgate.evaluation_context import EvaluationContext
from graphgate.expression import ContextPath, EqualTo, Http, Input, JSException, UnsafeJS
from graphgate.httpmsg import Response
from graphgate.lambda_ import Lambda
from graphgate.request_context import HttpClient, RequestContext
from graphgate.request_template import RequestTemplate


class FakeClient(HttpClient):
    def __init__(self, response):
        self.response = response
        self.urls = []

    async def execute(self, request):
        self.urls.append(request.url)
        return self.response


class StaticResolver:
    def __init__(self, value=None):
        self._value = value

    def value(self):
        return self._value

    def args(self):
        return None

    def field(self):
        return None

    def add_error(self, error):
        pass


async def evaluate(lam, client=None, value=None):
    req_ctx = RequestContext(http_client=client or FakeClient(Response()))
    ctx = EvaluationContext(req_ctx=req_ctx, graphql_ctx=StaticResolver(value))
    return await lam.expression.eval(ctx)


@pytest.mark.asyncio
async def test_equal_to_true():
    assert await evaluate(Lambda.literal(1.0).eq(Lambda.literal(1.0))) is True


@pytest.mark.asyncio
async def test_equal_to_false():
    assert await evaluate(Lambda.literal(1.0).eq(Lambda.literal(2.0))) is False


@pytest.mark.asyncio
async def test_endpoint():
    client = FakeClient(Response(headers={"content-type": "application/json"}, body={"name": "Hans"}))
    template = RequestTemplate.from_url("http://localhost:8080/users")
    result = await evaluate(Lambda.from_request_template(template), client)
    assert result["name"] == "Hans"
    assert client.urls == ["http://localhost:8080/users"]


@pytest.mark.asyncio
async def test_unsafe_js_disabled():
    lam = Lambda.literal(1.0).to_unsafe_js("ctx + 100")
    assert isinstance(lam.expression, UnsafeJS)
    with pytest.raises(JSException):
        await evaluate(lam)


@pytest.mark.asyncio
async def test_context_and_paths():
    value = {"a": {"b": "c"}}
    assert await evaluate(Lambda.context(), value=value) == value
    assert await evaluate(Lambda.context_field("a"), value=value) == {"b": "c"}
    assert await evaluate(Lambda.context_path(["a", "b"]), value=value) == "c"


@pytest.mark.asyncio
async def test_to_input_path():
    lam = Lambda.literal({"a": {"b": 1}}).to_input_path(["a", "b"])
    assert isinstance(lam.expression, Input)
    assert await evaluate(lam) == 1


def test_builders_produce_expected_nodes():
    assert Lambda.context_field("x").expression == ContextPath(("x",))
    template = RequestTemplate.from_url("http://localhost:8080/")
    assert Lambda.from_request_template(template).expression == Http(template)
    combined = Lambda.literal(1).eq(Lambda.literal(2)).expression
    assert isinstance(combined, EqualTo)
    assert combined.left.value == 1 and combined.right.value == 2