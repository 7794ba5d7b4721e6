"""Minimal example for assembling a dotenv-style file into a tree."""

from pydantic import BaseModel

from envtree import bind, dumps, loads, query
from envtree.options import FormatOptions, QuoteStyle


ENV_TEXT = """
CONFIG__DATABASE__NAME=name
CONFIG__DATABASE__USERNAME=username
CONFIG__DATABASE__CREDENTIAL__TYPE=password
CONFIG__DATABASE__CREDENTIAL__PASSWORD=some_password
CONFIG__DATABASE__CONNECTION__POOL=10
CONFIG__DATABASE__CONNECTION__TIMEOUT=10
CONFIG__DATABASE__CONNECTION__RETRIES=[10, 20, 30]
# CONFIG__APPLICATION__ENV=development
CONFIG__APPLICATION__LOGGER__LEVEL=info
"""


class Connection(BaseModel):
    pool: int
    timeout: float
    retries: list[int]


class Database(BaseModel):
    name: str
    username: str
    connection: Connection


class Settings(BaseModel):
    database: Database


def main() -> None:
    """Parse, query, bind and re-render a configuration."""
    tree = loads(ENV_TEXT, entry_point="CONFIG")
    print(f"{tree=}")
    print("second retry:", query(tree, "DATABASE.CONNECTION.RETRIES[1]"))

    settings = bind(tree, Settings, lowercase_keys=True)
    print(f"{settings=}")

    print(dumps(tree, FormatOptions(quote_style=QuoteStyle.WHEN_NEEDED), entry_point="CONFIG"), end="")


if __name__ == "__main__":
    main()
