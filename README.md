# kvstore-api

An HTTP API for storing, reading and deleting string key-value pairs. The
data lives in a Tarantool space named `kvstore`, whose tuples hold the key in
field 0 (the primary key) and the value in field 1.

## Installation

```
pip install .
```

## Running the server

```
kvstore-api
```

The command takes no options besides `--help`. It reads its settings from the
environment:

| Variable         | Default     | Meaning                     |
|------------------|-------------|-----------------------------|
| `TARANTOOL_HOST` | `localhost` | Tarantool host              |
| `TARANTOOL_PORT` | `3301`      | Tarantool port              |
| `SERVER_PORT`    | `8080`      | Port the HTTP server binds  |

If it cannot connect to Tarantool at start-up, or cannot bind the port, it
logs the error and exits with status 1. On SIGINT or SIGTERM it stops the
server and exits with status 0.

## Endpoints

| Path                     | Result                                                          |
|--------------------------|-----------------------------------------------------------------|
| `/health`                | `200` with the plain-text body `ok`                             |
| `/api/v1/get?key=K`      | `200` with `{"key": K, "value": V}`, or `404` if K is absent    |
| `/api/v1/set`            | JSON body `{"key": K, "value": V}`; `201` with an empty body    |
| `/api/v1/delete?key=K`   | `204` once removed, or `404` if K is absent                     |
| `/swagger/doc.json`      | the API description in Swagger 2.0 form                         |

The API is meant to be called with `GET` for get, `POST` for set and `DELETE`
for delete, but the handlers do not check the method. Any other path answers
`404` with the text `404 page not found`.

Errors:

- A missing or empty `key` query parameter gives `400` with
  `{"error": "missing key parameter"}`.
- An unknown key gives `404` with `{"error": "key not found"}`.
- A storage failure gives `500` with `{"error": "internal server error"}`
  (get and delete) or `{"error": "failed to set"}` (set).
- A set body that is not a JSON object with string fields, or whose `key` or
  `value` is empty, gives `400` whose body is the error message as a JSON
  string rather than an `{"error": ...}` object.

Requests under `/api/v1/` are logged on completion with their status, method,
URL and duration.

## Using it as a library

`kvstore_api.app.create_app(config, store)` builds the WSGI application. It
accepts any object that provides `get`, `set` and `delete` in the shape of
`kvstore_api.service.Storage`: `get` returns the value or raises
`KeyNotFoundError`, `delete` raises `KeyNotFoundError` for an absent key. With
no `store`, it connects to Tarantool using `config.tt` and uses
`kvstore_api.repository.KVRepository`.

```python
from kvstore_api.app import create_app
from kvstore_api.config import load

app = create_app(load(), my_store)
```

`kvstore_api.config.load()` reads the environment variables above;
`new_tt_store_config(host, port)` and `new_server_config(port)` let explicit
values override them.

## Limitations

- There is no interactive Swagger UI; only the JSON description at
  `/swagger/doc.json` is served.
- The Tarantool client connects as the guest user and does not authenticate.
  The `kvstore` space must already exist; the package does not create it.

## Tests

```
pip install .[test]
pytest
```