"""The dialect selector."""

from __future__ import annotations

import enum

from punktum.errors import IllegalDialect


class Dialect(enum.Enum):
    """Which upstream ``.env`` parser to emulate."""

    Punktum = "punktum"
    NodeJS = "nodejs"
    JavaScriptDotenv = "javascript-dotenv"
    PythonDotenv = "python-dotenv"
    PythonDotenvCLI = "python-dotenv-cli"
    ComposeGo = "compose-go"
    GoDotenv = "go-dotenv"
    RubyDotenv = "ruby-dotenv"
    JavaDotenv = "java-dotenv"
    Binary = "binary"

    def __str__(self) -> str:
        return self.name

    @property
    def aliases(self) -> list[str]:
        return [alias for alias, dialect in _ALIASES.items() if dialect is self and alias]

    @classmethod
    def parse(cls, value: str) -> Dialect:
        """Parse a dialect name (ASCII case-insensitive).  ``""`` is Punktum."""
        try:
            return _ALIASES[value.lower()]
        except KeyError:
            raise IllegalDialect(value) from None


UPSTREAM: dict[Dialect, str] = {
    Dialect.Punktum: "native",
    Dialect.NodeJS: "https://github.com/nodejs/node/blob/main/src/node_dotenv.cc",
    Dialect.JavaScriptDotenv: "https://github.com/motdotla/dotenv",
    Dialect.PythonDotenv: "https://github.com/theskumar/python-dotenv",
    Dialect.PythonDotenvCLI: "https://github.com/venthur/dotenv-cli",
    Dialect.ComposeGo: "https://github.com/compose-spec/compose-go",
    Dialect.GoDotenv: "https://github.com/joho/godotenv",
    Dialect.RubyDotenv: "https://github.com/bkeepers/dotenv",
    Dialect.JavaDotenv: "https://github.com/cdimascio/dotenv-java",
    Dialect.Binary: "KEY=VALUE\\0 records",
}

_ALIASES: dict[str, Dialect] = {
    "": Dialect.Punktum,
    "punktum": Dialect.Punktum,
    "nodejs": Dialect.NodeJS,
    "javascriptdotenv": Dialect.JavaScriptDotenv,
    "jsdotenv": Dialect.JavaScriptDotenv,
    "javascript-dotenv": Dialect.JavaScriptDotenv,
    "js-dotenv": Dialect.JavaScriptDotenv,
    "pythondotenv": Dialect.PythonDotenv,
    "pydotenv": Dialect.PythonDotenv,
    "python-dotenv": Dialect.PythonDotenv,
    "py-dotenv": Dialect.PythonDotenv,
    "pythondotenvcli": Dialect.PythonDotenvCLI,
    "pydotenvcli": Dialect.PythonDotenvCLI,
    "python-dotenv-cli": Dialect.PythonDotenvCLI,
    "py-dotenv-cli": Dialect.PythonDotenvCLI,
    "composego": Dialect.ComposeGo,
    "compose-go": Dialect.ComposeGo,
    "godotenv": Dialect.GoDotenv,
    "go-dotenv": Dialect.GoDotenv,
    "rubydotenv": Dialect.RubyDotenv,
    "ruby-dotenv": Dialect.RubyDotenv,
    "rbdotenv": Dialect.RubyDotenv,
    "javadotenv": Dialect.JavaDotenv,
    "java-dotenv": Dialect.JavaDotenv,
    "binary": Dialect.Binary,
}
