"""Export LinkedIn session cookies via patchright for authenticated searches.

Usage:
    .venv/bin/python scripts/extract_cookies.py [--output PATH]

Opens a Chromium window. Log in to LinkedIn manually (solve any captcha or
app verification there), then press Enter in the terminal. Cookies are
written where BrowserSession loads them from (browser.cookies_path).
"""

import argparse
import json
from pathlib import Path

from patchright.sync_api import sync_playwright

DEFAULT_OUTPUT = "config/linkedin_cookies.json"
LOGIN_URL = "https://www.linkedin.com/login"


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Save LinkedIn cookies after a manual login")
    parser.add_argument("--output", default=DEFAULT_OUTPUT, help="Cookie JSON path")
    args = parser.parse_args(argv)

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=False)
        context = browser.new_context(locale="en-US")
        page = context.new_page()
        page.goto(LOGIN_URL)

        input("\n>>> Log in to LinkedIn, then press Enter here to save cookies...")

        cookies = context.cookies()
        output.write_text(json.dumps(cookies, indent=2))
        print(f"Saved {len(cookies)} cookies to {output}")

        browser.close()


if __name__ == "__main__":
    main()
