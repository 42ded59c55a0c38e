#!/usr/bin/env python3
"""
Setup script for Heading Style Gatherer.
Installs the project, the Chromium browser used by Playwright, and a starter URL list.
"""

import json
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

STARTER_URLS = [
    "https://example.com",
    "https://www.python.org",
]


def run_command(cmd, description):
    """Run a command and report status."""
    print(f"\n📦 {description}...")
    try:
        result = subprocess.run(cmd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed")
        if e.stderr:
            print(e.stderr)
        return False
    print(f"✅ {description} completed")
    if result.stdout:
        print(result.stdout)
    return True


def seed_url_list(path):
    """Write a starter URL list unless one already exists."""
    if path.exists():
        print(f"\nℹ️  Keeping existing {path.name}")
        return False
    path.write_text(json.dumps(STARTER_URLS, indent=2) + "\n", encoding="utf-8")
    print(f"\n📝 Wrote starter {path.name}")
    return True


def main(root=PROJECT_ROOT):
    print("🚀 Setting up Heading Style Gatherer...")

    if sys.version_info < (3, 8):
        print("❌ Python 3.8+ required")
        sys.exit(1)

    if not run_command(
        [sys.executable, "-m", "pip", "install", "-e", str(root)],
        "Installing heading-style-gatherer",
    ):
        sys.exit(1)

    if not run_command(
        [sys.executable, "-m", "playwright", "install", "chromium"],
        "Installing Chromium browser",
    ):
        sys.exit(1)

    seed_url_list(root / "list-of-urls.json")

    print("\n✅ Setup complete! You can now run:")
    print("   heading-styles --urls list-of-urls.json --output talk-test.csv")


if __name__ == "__main__":
    main()
