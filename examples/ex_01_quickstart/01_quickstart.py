"""Quickstart: build an object graph from registered pieces.

Register the leaf value, let ``resolve_dependencies`` generate ``autoresolve``
for each class, and resolve only the top-level service.
"""

from __future__ import annotations

from wonderbox import Container, resolve_dependencies


@resolve_dependencies
class Database:
    def __init__(self, url: str) -> None:
        self.url = url


@resolve_dependencies
class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


@resolve_dependencies
class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository


def main() -> None:
    container = Container()
    container.register_clone("sqlite:///app.db")
    container.register_autoresolvable(Database)
    container.register_autoresolvable(UserRepository)
    container.register_autoresolvable(UserService)

    service = container.resolve(UserService)
    if service is None:
        raise SystemExit("UserService could not be built")

    print(f"db_url={service.repository.database.url}")  # => db_url=sqlite:///app.db

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database

    incomplete = Container()
    incomplete.register_autoresolvable(UserService)
    print(f"missing={incomplete.resolve(UserService)}")  # => missing=None


if __name__ == "__main__":
    main()
