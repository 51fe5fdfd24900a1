from __future__ import annotations

from typing import List

import typer
from rich import print as rprint
from rich.console import Console

from heapoql.oql import factory
from heapoql.oql.model import ClassRef
from heapoql.oql.union import union_all

app = typer.Typer(add_completion=False, help="Build OQL queries for heap snapshots.")

# Class patterns may contain [..], which rich would read as markup
_out = Console(markup=False, highlight=False, soft_wrap=True)


def _emit(query: str) -> None:
    _out.print(query)


def _parse_address(value: str) -> int:
    try:
        return int(value, 0)
    except ValueError:
        rprint(f"[red]Not a valid address: {value!r}[/red]")
        raise typer.Exit(code=1)


@app.command()
def address(value: str = typer.Argument(..., help="Object address, decimal or 0x-prefixed hex")):
    """Select an object by address."""
    _emit(factory.for_address(_parse_address(value)))


@app.command("object")
def object_(object_id: int = typer.Argument(..., help="Object id")):
    """Select an object by id."""
    _emit(factory.for_object_id(object_id))


@app.command()
def objects(object_ids: List[int] = typer.Argument(..., help="Object ids")):
    """Select several objects by id."""
    query = factory.for_object_ids(object_ids)
    if query is None:
        rprint("[red]At least one object id is required.[/red]")
        raise typer.Exit(code=1)
    _emit(query)


@app.command()
def retained(object_id: int = typer.Argument(..., help="Object id")):
    """Retained set of an object."""
    _emit(factory.retained_by_object(object_id))


@app.command("retained-query")
def retained_query(query: str = typer.Argument(..., help="OQL query")):
    """Retained set of the objects selected by a query."""
    _emit(factory.retained_by(query))


@app.command("class")
def class_(name_or_id: str = typer.Argument(..., help="Class name or class object id")):
    """All objects of a class."""
    target = ClassRef(object_id=int(name_or_id)) if name_or_id.isdigit() else ClassRef(name=name_or_id)
    _emit(factory.for_objects_of_class(target))


@app.command()
def instances(
    pattern: str = typer.Argument(..., help="Regular expression on class names"),
    subclasses: bool = typer.Option(False, "--subclasses", "-s", help="Include subclasses"),
):
    """Instances of classes matching a pattern."""
    _emit(factory.instances_by_pattern(pattern, subclasses))


@app.command()
def classes(
    pattern: str = typer.Argument(..., help="Regular expression on class names"),
    subclasses: bool = typer.Option(False, "--subclasses", "-s", help="Include subclasses"),
):
    """Classes matching a pattern."""
    _emit(factory.classes_by_pattern(pattern, subclasses))


@app.command("loader-classes")
def loader_classes(class_loader_id: int = typer.Argument(..., help="Class loader object id")):
    """Classes loaded by a class loader."""
    _emit(factory.classes_by_class_loader_id(class_loader_id))


@app.command("loader-instances")
def loader_instances(class_loader_id: int = typer.Argument(..., help="Class loader object id")):
    """Objects of classes loaded by a class loader."""
    _emit(factory.instances_by_class_loader_id(class_loader_id))


@app.command("union")
def union_(
    fragments: List[str] = typer.Argument(..., help="OQL fragments, combined in order"),
    no_merge: bool = typer.Option(False, "--no-merge", help="Always wrap in UNION, never merge id lists"),
):
    """Combine fragments into one query, merging id lists where possible."""
    query = union_all(fragments, merge=False if no_merge else None)
    if query is None:
        rprint("[red]Nothing to combine.[/red]")
        raise typer.Exit(code=1)
    _emit(query)


def main():
    app()


if __name__ == "__main__":
    main()
