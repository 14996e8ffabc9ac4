import asyncio
import json
import sys
import argparse
from dataclasses import asdict
from typing import List, Optional

from epress.config import ConfigurationError, NewsClientSettings
from epress.news.fetcher import NewsFetcher
from epress.news.model import Article, Category, CATEGORIES
from epress.view.shell import PresentationShell
from epress.view.state import PageState, page_status


def setup_argparser():
    """Set up command line argument parser."""
    parser = argparse.ArgumentParser(prog="epress", description="E-Press command line headline reader")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("categories", help="List headline categories")

    headlines_parser = subparsers.add_parser("headlines", help="Show top headlines for a category")
    headlines_parser.add_argument("--category", default=Category.GENERAL.value, help="Headline category (case insensitive)")
    headlines_parser.add_argument("--country", help="Country code, overrides NEWS_COUNTRY")
    headlines_parser.add_argument("--lang", help="Language code, overrides NEWS_LANGUAGE")
    headlines_parser.add_argument("--json", action="store_true", help="Print articles as JSON")

    return parser


def build_settings(country: Optional[str] = None, language: Optional[str] = None) -> NewsClientSettings:
    """Settings from the environment with command line overrides applied; fails fast without an API key."""
    settings = NewsClientSettings.from_config()
    overrides = {}
    if country:
        overrides["country"] = country
    if language:
        overrides["language"] = language
    if overrides:
        settings = settings.model_copy(update=overrides)
    settings.require_api_key()
    return settings


async def load_headlines(category: Category, settings: NewsClientSettings) -> PageState:
    async with NewsFetcher(settings) as fetcher:
        shell = PresentationShell(fetcher, settings=settings)
        try:
            if category == shell.state.active_page.category:
                return await shell.start()
            return await shell.select_category(category)
        finally:
            await shell.close()


def format_articles(articles: List[Article]) -> str:
    lines = []
    for index, article in enumerate(articles, start=1):
        lines.append(f"{index}. {article.headline}")
        lines.append(f"   {article.source} | {article.date}")
        if article.summary:
            lines.append(f"   {article.summary}")
        lines.append(f"   {article.link}")
    return "\n".join(lines)


def show_headlines(category_name: str, country: Optional[str], language: Optional[str], as_json: bool) -> int:
    category = Category.parse(category_name)
    settings = build_settings(country, language)

    page = asyncio.run(load_headlines(category, settings))

    if page.error is not None:
        print(f"❌ {page_status(page)}: {page.error}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps([asdict(article) for article in page.articles], indent=2, ensure_ascii=False))
        return 0

    print(f"{category.value} headlines")
    print(format_articles(list(page.articles)) if page.articles else page_status(page))
    return 0


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = setup_argparser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "categories":
        for category in CATEGORIES:
            print(category.value)
        sys.exit(0)

    elif args.command == "headlines":
        try:
            sys.exit(show_headlines(args.category, args.country, args.lang, args.json))
        except ValueError as e:
            print(f"❌ {e}", file=sys.stderr)
            sys.exit(2)
        except ConfigurationError as e:
            print(f"⚠️  {e}", file=sys.stderr)
            sys.exit(2)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
