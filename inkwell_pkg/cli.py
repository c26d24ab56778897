#!/usr/bin/env python3
"""
Command-line interface for Inkwell - static site generator.
"""

import os
import sys
import argparse
import time
import shutil
from . import __version__
from .core import Inkwell, PACKAGE_ASSETS, PACKAGE_TEMPLATES
from .errors import InkwellError
from .settings import InkwellSettings

SAMPLE_POST = """---
title: Hello, world
date: 2024-05-01
description: The first post on this site.
tags: [meta, writing]
slug: hello-world
---

# Hello, world

This site is built with **Inkwell**. Posts live in `content/posts/` as
markdown files with a short front matter block on top.

## Writing a post

1. Copy this file and give it a new `slug`
2. Set `draft: true` while you are still working on it
3. Run `inkwell` to rebuild the site

> Links only use safe schemes, so [this one](https://example.com) works
> and `javascript:` links are shown as plain text.

```python
print("code fences are never formatted")
```
"""


def _copy_tree_files(source_dir, dest_dir, label):
    """Copy files from a packaged directory without overwriting existing ones."""
    for dirpath, _, filenames in os.walk(source_dir):
        relative = os.path.relpath(dirpath, source_dir)
        target_dir = os.path.normpath(os.path.join(dest_dir, relative))
        os.makedirs(target_dir, exist_ok=True)
        for filename in sorted(filenames):
            dest_path = os.path.join(target_dir, filename)
            shown = os.path.relpath(dest_path)
            if os.path.exists(dest_path):
                print(f"{label} already exists: {shown}")
            else:
                shutil.copy2(os.path.join(dirpath, filename), dest_path)
                print(f"Created {label.lower()}: {shown}")


def create_starter_structure(base_dir=None) -> None:
    """Create starter structure with templates, content, and assets."""
    current_dir = base_dir or os.getcwd()

    posts_dir = os.path.join(current_dir, 'content', 'posts')
    os.makedirs(posts_dir, exist_ok=True)

    _copy_tree_files(PACKAGE_TEMPLATES, os.path.join(current_dir, 'templates'), 'Template')
    _copy_tree_files(PACKAGE_ASSETS, os.path.join(current_dir, 'assets'), 'Asset')

    post_path = os.path.join(posts_dir, 'hello-world.md')
    if os.path.exists(post_path):
        print("Sample post already exists: content/posts/hello-world.md")
    else:
        with open(post_path, 'w', encoding='utf-8') as f:
            f.write(SAMPLE_POST)
        print("Created sample post: content/posts/hello-world.md")

    print("\nStarter structure created successfully!")
    print("\nNext steps:")
    print("1. Edit the configuration file (inkwell.yml)")
    print("2. Customize templates in the 'templates/' directory")
    print("3. Add your posts to 'content/posts/'")
    print("4. Run 'inkwell' to build your site")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Inkwell - Static Site Generator')
    parser.add_argument('--output', type=str,
                        help='Output directory for generated site')
    parser.add_argument('--content', type=str,
                        help='Content directory containing posts/')
    parser.add_argument('--templates', type=str,
                        help='Templates directory')
    parser.add_argument('--assets', type=str,
                        help='Assets directory to copy to output')
    parser.add_argument('--site-url', type=str,
                        help='Absolute site URL for canonical links, RSS feed and sitemap')
    parser.add_argument('--site-title', type=str, help='Site title')
    parser.add_argument('--site-description', type=str, help='Site description for metadata and RSS')
    parser.add_argument('--author-name', type=str, help='Author name')
    parser.add_argument('--author-url', type=str, help='Author URL for structured data')
    parser.add_argument('--posts-per-rss', type=int,
                        help='Number of posts in the RSS feed')
    parser.add_argument('--recent-posts', type=int,
                        help='Number of posts listed on the home page')
    parser.add_argument('--minify', action='store_true', default=None,
                        help='Minify CSS and JS assets')
    parser.add_argument('--log-dir', type=str, default='logs',
                        help="Directory for the detailed build log (default: logs)")
    parser.add_argument('--init', type=str, choices=['yml', 'yaml', 'json'],
                        help='Create a sample configuration file and starter structure')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv=None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    # Handle init command
    if args.init:
        settings_loader = InkwellSettings()
        config_path = settings_loader.create_sample_config(args.init)
        print(f"Created sample configuration file: {config_path}")

        print("\nCreating starter project structure...")
        create_starter_structure()
        return

    # Record start time
    overall_start_time = time.time()

    try:
        # Load settings from configuration file
        settings_loader = InkwellSettings()
        settings_loader.load_settings()

        # Command line arguments take precedence
        args_dict = {k: v for k, v in vars(args).items() if v is not None and k not in ('init', 'log_dir')}
        final_settings = settings_loader.merge_with_args(args_dict)

        output_dir = os.path.expanduser(final_settings['output'])

        generator = Inkwell(
            config=InkwellSettings.to_site_config(final_settings),
            content_dir=final_settings['content'],
            templates_dir=final_settings['templates'],
            output_dir=output_dir,
            assets_dir=final_settings['assets'],
            log_dir=args.log_dir,
        )

        generator.build()

        # Show build statistics
        total_time = time.time() - overall_start_time
        generator.logger.info(f"Site build completed in {total_time:.6f} seconds.")
        generator.logger.info(f"Total posts generated: {generator.posts_generated}")
        generator.logger.info(f"Total pages generated: {generator.pages_generated}")

    except (InkwellError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
