#!/usr/bin/env python3
"""
Heading Style Gatherer - Collection Script
Visits a list of URLs with Playwright and records the computed font size and
font weight of every h1 on each page into a CSV file.
"""

import argparse
import asyncio
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

try:
    from playwright.async_api import async_playwright, Browser
except ImportError:
    print("ERROR: playwright not installed. Run: pip install playwright && playwright install chromium")
    raise SystemExit(1)


DEFAULT_URLS_PATH = "list-of-urls.json"
DEFAULT_OUTPUT_PATH = "talk-test.csv"

CSV_HEADER = "font size, font weight"

# Playwright's equivalent of "no connections for 500ms"
WAIT_UNTIL = "networkidle"

ON_ERROR_CHOICES = ["abort", "skip"]

H1_STYLES_SCRIPT = """() => {
    const headings = Array.from(document.getElementsByTagName('h1'));
    return headings.map((el) => {
        const style = window.getComputedStyle(el);
        return [style.fontSize, style.fontWeight];
    });
}"""


class GatherError(Exception):
    pass


class UrlListError(GatherError):
    pass


class PageScrapeError(GatherError):
    def __init__(self, url: str, stage: str, message: str):
        super().__init__(f"Failed to scrape {url} at {stage}: {message}")
        self.url = url
        self.stage = stage


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_text(path: Path, content: str) -> None:
    path.write_text(content, encoding="utf-8")


def csv_quote(value: str) -> str:
    return '"' + str(value).replace('"', '""') + '"'


def load_urls(path: Path) -> List[str]:
    """Read the ordered URL list from a JSON document."""
    try:
        text = read_text(path)
    except FileNotFoundError as exc:
        raise UrlListError(f"URL list not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise UrlListError(f"URL list {path} could not be read: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise UrlListError(f"URL list {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise UrlListError(f"URL list {path} must be a JSON array, got {type(data).__name__}")
    for idx, item in enumerate(data):
        if not isinstance(item, str):
            raise UrlListError(f"URL list {path} entry {idx} is not a string: {item!r}")
    return list(data)


@dataclass
class StyleRow:
    font_size: str
    font_weight: str

    def to_csv_line(self) -> str:
        return f"{csv_quote(self.font_size)}, {csv_quote(self.font_weight)}"


@dataclass
class PageFailure:
    url: str
    stage: str
    error: str


class ResultBuffer:
    """In-memory CSV: one pre-formatted line per heading, header added on render."""

    def __init__(self):
        self.lines: List[str] = []

    def __len__(self) -> int:
        return len(self.lines)

    def append(self, row: StyleRow) -> None:
        self.lines.append(row.to_csv_line())

    def extend(self, rows: List[StyleRow]) -> None:
        for row in rows:
            self.append(row)

    def render(self) -> str:
        return "".join(line + "\n" for line in [CSV_HEADER] + self.lines)

    def write(self, path: Path) -> None:
        # overwrite, never append
        write_text(path, self.render())


def parse_style_pairs(raw: Any) -> List[StyleRow]:
    rows = []
    for pair in raw or []:
        font_size, font_weight = pair
        rows.append(StyleRow(font_size=str(font_size), font_weight=str(font_weight)))
    return rows


async def scrape_page(browser: Browser, url: str, buffer: ResultBuffer) -> int:
    """
    Load ``url`` in a fresh browser context, wait for the network to go idle
    and append the computed style of every h1 to ``buffer``.

    Returns the number of rows appended. The context is always closed.
    """
    stage = "open"
    try:
        context = await browser.new_context()
    except Exception as exc:
        raise PageScrapeError(url, stage, str(exc)) from exc
    try:
        page = await context.new_page()
        stage = "goto"
        await page.goto(url, wait_until=WAIT_UNTIL)
        stage = "evaluate"
        raw = await page.evaluate(H1_STYLES_SCRIPT)
        rows = parse_style_pairs(raw)
    except Exception as exc:
        raise PageScrapeError(url, stage, str(exc)) from exc
    finally:
        await context.close()

    buffer.extend(rows)
    return len(rows)


class HeadingStyleGatherer:
    def __init__(
        self,
        urls: List[str],
        output_path: str,
        on_error: str = "abort",
        headless: bool = True,
    ):
        if on_error not in ON_ERROR_CHOICES:
            raise ValueError(f"on_error must be one of {ON_ERROR_CHOICES}, got {on_error!r}")
        self.urls = list(urls)
        self.output_path = Path(output_path)
        self.on_error = on_error
        self.headless = headless

        self.buffer = ResultBuffer()
        self.failures: List[PageFailure] = []
        self.pages_visited = 0

    async def gather_all(self) -> Path:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=self.headless)
            try:
                return await self.run(browser)
            finally:
                await browser.close()

    async def run(self, browser: Browser) -> Path:
        for url in self.urls:
            print(f"🔎 Visiting {url}")
            try:
                count = await scrape_page(browser, url, self.buffer)
            except PageScrapeError as exc:
                if self.on_error == "abort":
                    raise
                self.failures.append(PageFailure(url=exc.url, stage=exc.stage, error=str(exc.__cause__)))
                print(f"⚠️  Skipping {url}: {exc}")
                continue
            self.pages_visited += 1
            print(f"   {count} h1 element(s)")

        self.buffer.write(self.output_path)

        print("\n✅ Gathering complete")
        print(f"Pages: {self.pages_visited}/{len(self.urls)}")
        print(f"Rows: {len(self.buffer)}")
        if self.failures:
            print(f"Failures: {len(self.failures)}")
        print(f"Output: {self.output_path}")
        return self.output_path


async def main_async(args: argparse.Namespace) -> None:
    urls = load_urls(Path(args.urls))
    gatherer = HeadingStyleGatherer(
        urls=urls,
        output_path=args.output,
        on_error=args.on_error,
        headless=not args.headed,
    )
    await gatherer.gather_all()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Collect computed h1 font styles from a list of websites")
    parser.add_argument("--urls", "-u", default=DEFAULT_URLS_PATH, help="JSON file holding a list of URLs")
    parser.add_argument("--output", "-o", default=DEFAULT_OUTPUT_PATH, help="CSV file to write")
    parser.add_argument(
        "--on-error",
        choices=ON_ERROR_CHOICES,
        default="abort",
        help="What to do when a page fails to load: stop the run (abort) or record it and continue (skip)",
    )
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        asyncio.run(main_async(args))
    except GatherError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
