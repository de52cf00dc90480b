# taskboard

taskboard is a set of small JSON web services that run as WSGI
applications, built on Werkzeug:

- a **task manager** (`taskboard.server`, `taskboard.handlers`) with
  create, read, update and delete operations, per-request IDs, JSON
  logging, and storage either in memory or in a SQL database;
- an **article API** (`taskboard.article_api`) that keeps a list of
  articles in memory;
- an **article store** (`taskboard.article_store`) that keeps articles in
  a SQL database.

It also has a few short concurrency demos in `taskboard.demos`.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running the task manager

```
taskboard-server [--config PATH] [--host HOST] [--port PORT]
```

By default the server listens on `0.0.0.0:8080` and reads `config.yaml`
from the current directory. If the file is missing or cannot be read, the
built-in defaults are used, and these keep tasks in memory. Values of the
wrong type in the file are ignored.

A configuration that stores tasks in PostgreSQL looks like this:

```yaml
repository_type: postgres
database:
  host: localhost
  port: 5432
  user: user
  password: password
  dbname: taskmanager
```

Any `repository_type` other than `postgres` selects the in-memory store.
The SQL store connects with `sslmode=disable` and creates its `tasks`
table if the table is missing. It needs a PostgreSQL driver that
SQLAlchemy can load. This package does not install one. If the repository
cannot be created, the server logs a fatal message and exits with status 1.

### Endpoints

Routes match on the exact path. Any HTTP method is accepted.

| Path                | What it does                                                          |
|---------------------|-----------------------------------------------------------------------|
| `/tasks`            | Create a task from the JSON body. Returns the stored task.            |
| `/task?id=…`        | Return one task. `400` if `id` is missing, `404` if it is unknown.    |
| `/task/update`      | Replace a task from the JSON body. `404` if it is unknown.            |
| `/task/delete?id=…` | Delete a task. `204` on success, `404` if it is unknown.              |
| `/tasks/all`        | Return every task.                                                    |

Any other path answers `404 page not found`. A body that is not valid
JSON, or that has fields of the wrong type, answers `400 Invalid request
body`.

Tasks are encoded with the keys `ID`, `Title`, `Description`, `Status`,
`CreatedAt` and `UpdatedAt`. Timestamps are in RFC 3339 format. When
decoding, key names match regardless of case. New tasks get a fresh UUID,
and their creation and update times are set when they are stored.

Every request gets its own request ID. The task creation handler adds
that ID to its log lines. `taskboard.logger.Logger` writes one JSON object
per line to standard error. Each object has the fields `level`,
`timestamp`, `caller` and `msg`, plus any bound fields. The default level
is INFO.

## Running the article API

```
taskboard-articles [--host HOST] [--port PORT]
```

The article API listens on `0.0.0.0:8000` and starts with two articles:

| Method | Path            | What it does                                                  |
|--------|-----------------|---------------------------------------------------------------|
| GET    | `/`             | The welcome message `"Welcome to the HomePage!"`.             |
| GET    | `/articles`     | Every article.                                                |
| POST   | `/article`      | Add the article in the JSON body (`id`, `title`, `content`).  |
| GET    | `/article/{id}` | One article, or an empty article if the ID is unknown.        |
| DELETE | `/article/{id}` | Remove the article and return the remaining list.             |

A known path called with the wrong method answers `405`. An unknown path
answers `404`. A POST body that cannot be read gives an empty article.

## The SQL article store

`taskboard.article_store.create_store_app(store)` builds a WSGI app
around an `ArticleStore`. You open the store with
`ArticleStore.connect(url)`, which also checks that the database answers.
The app has two routes:

- `POST /articles` saves `title` and `content` from the JSON body and
  answers `201` with `{"status":"ok"}`. An invalid body answers `400`.
- `GET /articles` returns the rows as objects with the keys `ID`, `Title`
  and `Content`. It returns `null` when there are no rows.

The store expects an `articles` table with the columns `id`, `title` and
`content`. It does not create this table. There is no command to serve
this app; mount it in any WSGI server.

## Using the library

The services can be used directly, without HTTP:

```python
from taskboard.domain import Task, TaskNotFoundError
from taskboard.memory_repo import MemoryTaskRepository
from taskboard.service import TaskService

service = TaskService(MemoryTaskRepository())
task = service.create_task(Task(title="Write report", description="Quarterly numbers"))

print(service.get_task(task.id).title)   # Write report
service.delete_task(task.id)

try:
    service.get_task(task.id)
except TaskNotFoundError:
    print("gone")
```

Any of the applications can be served by any WSGI server:

- `taskboard.server.build_app(cfg)` builds the task manager from a
  `Config`. `taskboard.config.load_config(path)` reads a `Config`, and
  `taskboard.factory.new_repository(cfg)` picks the storage.
- `taskboard.handlers.setup_router(TaskHandler(service))` builds the
  task routes around an existing `TaskService`.
- `taskboard.article_api.create_app(service)` builds the article API
  around an `ArticleService`.
- `taskboard.article_store.create_store_app(store)` builds the SQL-backed
  article app.

## Demos

`taskboard.demos` contains the following:

- `run_bank_demo(workers)`: threads deposit into and withdraw from a
  locked `BankAccount`. Returns the final balance.
- `run_workers(count, delay)`: workers that sleep in turn. Returns their
  IDs in the order they finished.
- `run_channel_demo()`: values handed between threads through a one-slot
  queue.
- `numbers_then_letters()`: digits from one thread, then letters from
  another.
- `Person.update_name()` and `hello()`.

## What it does not do

There is no authentication and no persistence beyond the SQL stores. The
in-memory stores lose their data when the process stops. No database
driver is bundled, so the SQL stores need one to be installed separately.