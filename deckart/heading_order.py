#!/usr/bin/env python3
"""
Check that HTML headings never skip a level (e.g. h1 followed by h3).

Usage:
    python -m deckart.heading_order slides/index.html other.html
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List

from bs4 import BeautifulSoup

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


@dataclass
class Heading:
    level: int
    text: str


@dataclass
class HeadingIssue:
    previous: Heading
    current: Heading

    @property
    def message(self) -> str:
        return (
            f'Heading level skipped: h{self.previous.level} "{self.previous.text}" '
            f'followed by h{self.current.level} "{self.current.text}"'
        )


def extract_headings(html: str) -> List[Heading]:
    """Headings in document order with their visible text."""
    soup = BeautifulSoup(html, "html.parser")
    return [
        Heading(level=int(tag.name[1]), text=tag.get_text(" ", strip=True))
        for tag in soup.find_all(HEADING_TAGS)
    ]


def check_heading_order(headings: List[Heading]) -> List[HeadingIssue]:
    """Going deeper may only add one level at a time; going back up is free."""
    issues = []
    for prev, curr in zip(headings, headings[1:]):
        if curr.level - prev.level > 1:
            issues.append(HeadingIssue(previous=prev, current=curr))
    return issues


def check_file(path: Path) -> bool:
    print(f"\nChecking {path}...")
    headings = extract_headings(path.read_text(encoding="utf-8"))

    print(f"Found {len(headings)} headings:")
    for h in headings:
        print(f"  h{h.level}: {h.text}")

    issues = check_heading_order(headings)
    if issues:
        print("\n❌ Heading order errors found:")
        for issue in issues:
            print(f"  - {issue.message}")
        return False
    print("✅ Heading order is correct")
    return True


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Lint heading order in HTML files")
    parser.add_argument("files", nargs="+", help="HTML files to check")
    args = parser.parse_args(argv)

    ok = True
    for name in args.files:
        path = Path(name)
        if not path.exists():
            print(f"Error: File not found: {path}")
            ok = False
            continue
        ok = check_file(path) and ok

    if ok:
        print("\n🎉 All files passed heading order checks")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
