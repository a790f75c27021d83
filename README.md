# graphgate

The parts of a GraphQL gateway that turn a field resolver into upstream HTTP calls. The package has no dependencies outside the standard library.

## Modules

- `graphgate.valid`: `Valid`, `ValidationError` and `Cause`. A `Valid` holds either a value or a `ValidationError`. Because causes from several checks are combined, one check can report every error it finds. `Valid.trace` adds a trace entry to the front of each cause, and `Valid.to_result` returns the value or raises the `ValidationError`.
- `graphgate.json_schema`: `JsonSchema`, built with `JsonSchema.obj`, `arr`, `string`, `number`, `boolean` and `.optional()`. `validate` checks a plain JSON value and returns a `Valid`. Each failure is traced by field name or list index.
- `graphgate.try_fold`: `TryFold`, a function of `(input, state)` that returns a `Valid`. Folds chain with `and_`, or with `TryFold.from_iter` for a list. If one fold fails, the next one still runs on the previous state, so its errors are collected as well. `transform`, `transform_valid` and `update` change the state type or the state.
- `graphgate.json_like`: functions over plain JSON values. `get_path` and `get_key` look values up. `gather_path_matches`, `group_by_key` and `group_by` group objects by the value at a path. `path_string` returns a scalar as text, and `to_graphql` renders a value as a GraphQL literal.
- `graphgate.mustache`: `Mustache` templates made of `Literal` and `Expression` segments, for example `http://host/{{value.id}}`. `render` uses the context's `path_string` method. If the context has no such method, it looks the path up in a plain JSON value. `render_graphql` uses the context's `path_graphql` method.
- `graphgate.httpmsg`: `Method`, `Request`, `Response`, `Cachability` and `CacheControl.parse`. It also has `cache_policy`, `max_age`, `cache_visibility` and `min_ttl`. `min_ttl` returns the smallest max-age in seconds, or `-1` if no response has one.
- `graphgate.request_context`: `HttpClient`, an abstract async client, and `RequestContext`. `RequestContext` holds the forwarded request headers, the server `vars`, and the `enable_http_validation` and `enable_cache_control` switches. It tracks the smallest max-age seen (`min_max_age`) and whether the response may be cached publicly (`cache_public`). If no client is given, requests go out through `urllib` on a worker thread, and the response body is decoded as JSON.
- `graphgate.evaluation_context`: `EvaluationContext`, `EmptyResolverContext`, `SelectionField`, `get_path_value` and `format_selection_set`. `path_string` and `path_graphql` resolve `value.*`, `args.*`, `headers.*` and `vars.*` paths.
- `graphgate.data_loader_request`: `DataLoaderRequest`, a hashable key for a `Request`. Two keys are equal when the URL, the body and the values of the named headers are all equal.
- `graphgate.request_template`: `RequestTemplate`. `to_request` renders the URL, query, headers and body into a `Request`. Query pairs that render empty are dropped, `content-type: application/json` is set, and the context's `headers` are forwarded.
- `graphgate.print_schema`: `print_schema(sdl)` tidies SDL text. It collapses runs of blank lines, turns leading tabs into two spaces each and trims the result.
- `graphgate.expression` and `graphgate.lambda_`: resolver expressions and the `Lambda` builder that creates them. The expressions are `ContextValue`, `ContextPath`, `Literal`, `EqualTo`, `Input`, `Http` and `UnsafeJS`. Failures raise `EvaluationError` subclasses: `IOException`, `JSException` and `APIValidationError`.

## Install

```
pip install .
```

## Examples

```python
from graphgate.mustache import Mustache

tmpl = Mustache.parse("/v1/templates?project-id={{value.projectId}}")
tmpl.render({"value": {"projectId": "123"}})
# '/v1/templates?project-id=123'
```

```python
from graphgate.request_template import RequestTemplate

req = RequestTemplate.from_url("http://localhost:3000/foo/{{bar.baz}}").to_request(
    {"bar": {"baz": "bar"}}
)
req.url
# 'http://localhost:3000/foo/bar'
```

```python
from graphgate.valid import Valid

Valid.fail(1).trace("A").trace("B").is_succeed()
# False
```

```python
import asyncio
from graphgate.evaluation_context import EvaluationContext
from graphgate.lambda_ import Lambda

expr = Lambda.literal(1.0).eq(Lambda.literal(1.0)).expression
asyncio.run(expr.eval(EvaluationContext()))
# True
```

## What it does not do

- There is no GraphQL server and no command line. The package has no schema builder and does not resolve GraphQL operations. `print_schema` only tidies SDL text that you pass to it.
- Scripts are not run. An `UnsafeJS` expression always raises `JSException("JS execution is disabled")`.
- Requests are not batched. `DataLoaderRequest` provides the batching key only, and an `Http` expression sends each request on its own.
- There is no HTTP response cache. Cache-control headers are parsed and recorded on the `RequestContext`, and that is all.

## Tests

```
pip install ".[test]"
pytest
```