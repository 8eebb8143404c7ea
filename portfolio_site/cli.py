"""CLI entry point for the portfolio site."""

import argparse
import logging
import sys
from pathlib import Path

from portfolio_site.app import AppContext
from portfolio_site.config import load_config
from portfolio_site.data_access import DataExhaustedError
from portfolio_site.filtering import filter_projects
from portfolio_site.generator import ProjectGenerator
from portfolio_site.models import FilterState, PageType


def _split(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Portfolio site generator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    sub = parser.add_subparsers(dest="command")

    # build command
    sub.add_parser("build", help="Regenerate project pages and the homepage listing (default)")

    # add command
    add_parser = sub.add_parser("add", help="Add a project to the data file")
    add_parser.add_argument("title", help="Project title")
    add_parser.add_argument("description", nargs="?", default="A new project", help="Project description")
    add_parser.add_argument("technologies", nargs="?", default=None, help="Comma-separated technologies")
    add_parser.add_argument("features", nargs="?", default=None, help="Comma-separated features")

    # remove command
    remove_parser = sub.add_parser("remove", help="Remove a project from the data file")
    remove_parser.add_argument("id", help="Project slug")

    # list command
    list_parser = sub.add_parser("list", help="List projects, optionally filtered")
    list_parser.add_argument("--category", default="", help="Only projects with this tag")
    list_parser.add_argument("--search", default="", help="Case-insensitive substring search")

    # theme command
    theme_parser = sub.add_parser("theme", help="Show or change the saved theme")
    theme_parser.add_argument("action", nargs="?", choices=["light", "dark", "toggle"], default=None)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    context = AppContext.from_config(config)

    try:
        if args.command == "add":
            generator = ProjectGenerator(context)
            project = generator.add_project(
                args.title, args.description,
                technologies=_split(args.technologies),
                features=_split(args.features),
            )
            print(f"Added {project.slug}: {project.display_title}")

        elif args.command == "remove":
            generator = ProjectGenerator(context)
            project = generator.remove_project(args.id)
            print(f"Removed {project.slug}: {project.display_title}")

        elif args.command == "list":
            collection = context.loader.load(PageType.HOME)
            state = FilterState(selected_category=args.category, search_term=args.search)
            visible = filter_projects(collection, state)
            if len(visible) == 0:
                print("No projects found")
            for p in visible:
                tags = ", ".join(p.tags)
                print(f"  {p.slug}: {p.display_title} ({p.year or '?'}) [{tags}]")
            print(f"\nShowing {len(visible)} of {len(collection)} projects")

        elif args.command == "theme":
            theme = context.theme
            if args.action == "toggle":
                theme.toggle()
            elif args.action:
                theme.set_theme(args.action)
            print(theme.current)

        else:
            generator = ProjectGenerator(context)
            pages = generator.build()
            print(f"Generated {len(pages) - 1} project pages and {pages[-1]}")

    except (ValueError, DataExhaustedError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
