import os
import shutil
import logging
from datetime import date, datetime
from typing import Dict, List, Optional

import csscompressor
import rjsmin

from .converter import markdown_to_html
from .errors import ValidationError
from .feeds import generate_cname, generate_robots_txt, generate_rss_feed, generate_xml_sitemap
from .frontmatter import parse_front_matter, validate_document
from .page import PageAssembler, blog_posting_json_ld, person_json_ld
from .posts import Post, post_list_html, sort_posts, tags_html
from .settings import SiteConfig
from .template import load_template, render
from .utils import display_date, escape_html, reading_time

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
PACKAGE_TEMPLATES = os.path.join(PACKAGE_DIR, 'templates')
PACKAGE_ASSETS = os.path.join(PACKAGE_DIR, 'assets')

TEMPLATE_NAMES = ('base.html', 'post.html', 'writing.html', 'home.html',
                  'about.html', 'now.html', '404.html')


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages to be shown in the console."""
    def filter(self, record):
        allowed_messages = [
            "Site build completed in",
            "Total posts generated:",
            "Total pages generated:",
            "Loaded ",
            "Building post pages",
            "Building writing page",
            "Building home page",
            "Building about page",
            "Building now page",
            "Building 404 page",
            "Generating RSS feed",
            "Generating XML sitemap",
            "Generating robots.txt",
            "Generating CNAME",
            "Copied assets",
            "Minified assets",
        ]
        return record.levelno >= logging.WARNING or any(msg in record.getMessage() for msg in allowed_messages)


class Inkwell:
    """Builds the whole static site from a content directory."""

    TITLE_SEPARATOR = ' | '

    def __init__(self, config: SiteConfig = None, content_dir='content', templates_dir='templates',
                 output_dir='docs', assets_dir='assets', log_dir=None, build_date=None):
        self.config = config or SiteConfig()
        self.content_dir = content_dir
        self.templates_dir = templates_dir
        self.output_dir = output_dir
        self.assets_dir = assets_dir
        self.log_dir = log_dir
        self.build_date = build_date or date.today()
        self.posts_generated = 0
        self.pages_generated = 0
        self.posts: List[Post] = []
        self.outputs: Dict[str, str] = {}

        # Relative template and asset directories that don't exist fall back to the packaged defaults
        if not os.path.isabs(self.templates_dir) and not os.path.exists(self.templates_dir):
            self.templates_dir = PACKAGE_TEMPLATES
        if self.assets_dir and not os.path.isabs(self.assets_dir) and not os.path.exists(self.assets_dir):
            self.assets_dir = PACKAGE_ASSETS

        if not os.path.isdir(self.templates_dir):
            raise FileNotFoundError(f"Templates directory not found: {self.templates_dir}")
        if not os.path.isdir(self.content_dir):
            raise FileNotFoundError(f"Content directory not found: {self.content_dir}")

        self.setup_logging()

    @property
    def posts_dir(self):
        return os.path.join(self.content_dir, 'posts')

    def setup_logging(self):
        """Set up logging configuration."""
        self.logger = logging.getLogger('Inkwell')
        self.logger.setLevel(logging.DEBUG)

        if not self.logger.handlers:
            # Console handler with filter
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.INFO)
            console_handler.addFilter(InfoFilter())
            console_formatter = logging.Formatter('%(message)s')
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

            # File handler for all logs
            if self.log_dir:
                os.makedirs(self.log_dir, exist_ok=True)
                log_filename = datetime.now().strftime('inkwell_%Y-%m-%d_%H-%M-%S.log')
                log_filepath = os.path.join(self.log_dir, log_filename)

                file_handler = logging.FileHandler(log_filepath, encoding='utf-8')
                file_handler.setLevel(logging.DEBUG)
                file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
                file_handler.setFormatter(file_formatter)
                self.logger.addHandler(file_handler)

    def get_markdown_files(self, directory):
        """Get all markdown files from a directory, in name order."""
        markdown_files = []
        if os.path.exists(directory):
            for file in sorted(os.listdir(directory)):
                if file.endswith('.md'):
                    markdown_files.append(os.path.join(directory, file))
        return markdown_files

    def load_post(self, file_path) -> Optional[Post]:
        """
        Parse, validate and convert one markdown file.

        Returns:
            The Post, or None for drafts

        Raises:
            FormatError, ValidationError: The document is malformed
        """
        source = os.path.basename(file_path)
        with open(file_path, 'r', encoding='utf-8') as f:
            raw = f.read()

        document = parse_front_matter(raw, source)
        validate_document(document, source)
        if document.is_draft:
            self.logger.debug(f"Skipping draft: {source}")
            return None

        html = markdown_to_html(document.body, allow_html=document.allows_html)
        self.logger.debug(f"Converted {source} ({len(html)} bytes of HTML)")
        return Post(document=document, html=html, reading_time=reading_time(document.body), source=source)

    def load_posts(self) -> List[Post]:
        """Load every published post, newest first. Any bad document aborts the build."""
        posts = []
        slugs: Dict[str, str] = {}
        for file_path in self.get_markdown_files(self.posts_dir):
            post = self.load_post(file_path)
            if post is None:
                continue
            if post.slug in slugs:
                raise ValidationError(
                    f'Duplicate slug "{post.slug}" in {post.source} (already used by {slugs[post.slug]})'
                )
            slugs[post.slug] = post.source
            posts.append(post)

        if not posts:
            self.logger.warning("No published posts found.")
        self.posts = sort_posts(posts)
        self.logger.info(f"Loaded {len(self.posts)} post(s)")
        return self.posts

    def load_templates(self) -> Dict[str, str]:
        return {name: load_template(self.templates_dir, name) for name in TEMPLATE_NAMES}

    def _check_output_dir(self):
        """Refuse to wipe a directory that holds the site's own sources."""
        output = os.path.realpath(self.output_dir)
        sources = (('content', self.content_dir), ('templates', self.templates_dir), ('assets', self.assets_dir))
        for name, path in sources:
            if not path or not os.path.exists(path):
                continue
            real = os.path.realpath(path)
            if real == output or real.startswith(output + os.sep):
                raise ValueError(
                    f"Refusing to clean output directory {self.output_dir}: it contains the {name} directory"
                )

    def create_output_dir(self):
        """Empty the output directory and recreate it."""
        self._check_output_dir()
        if os.path.exists(self.output_dir):
            shutil.rmtree(self.output_dir)
        os.makedirs(self.output_dir, exist_ok=True)

    def stage(self, relative_path, content):
        """Queue a rendered file; nothing is written until every page has rendered."""
        self.outputs[relative_path] = content

    def write_file(self, relative_path, content):
        """Write a generated file below the output directory."""
        output_path = os.path.join(self.output_dir, relative_path)
        os.makedirs(os.path.dirname(output_path), exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(content)
        self.logger.debug(f"Generated {output_path}")
        return output_path

    def page_context(self):
        """Variables every page-level template may use."""
        return {
            'root': '/',
            'site_title': escape_html(self.config.site_title),
            'site_url': escape_html(self.config.site_url),
            'author_name': escape_html(self.config.author_name),
            'author_url': escape_html(self.config.author_url),
        }

    def page_title(self, name):
        return f"{name}{self.TITLE_SEPARATOR}{self.config.site_title}"

    def render_post(self, post: Post, templates, assembler: PageAssembler) -> str:
        """Render one post into a complete HTML page."""
        updated_html = ''
        if post.updated:
            updated_html = (f'<span>Updated <time datetime="{escape_html(post.updated)}">'
                            f'{display_date(post.updated)}</time></span>')

        content = render(templates['post.html'], {
            'post_title': escape_html(post.title),
            'date': escape_html(post.date),
            'date_display': display_date(post.date),
            'updated_display': updated_html,
            'reading_time': str(post.reading_time),
            'tags_html': tags_html(post.tags),
            'post_body': post.html,
        })

        return assembler.assemble(
            content,
            title=self.page_title(post.title),
            description=post.description,
            canonical=self.config.post_url(post.slug),
            og_title=post.title,
            og_description=post.description,
            og_type='article',
            depth=2,
            json_ld_extra=blog_posting_json_ld(self.config, post),
        )

    def build_post_pages(self, templates, assembler):
        self.logger.info("Building post pages")
        for post in self.posts:
            self.stage(os.path.join('posts', post.slug, 'index.html'),
                       self.render_post(post, templates, assembler))
            self.posts_generated += 1

    def build_writing_page(self, templates, assembler):
        self.logger.info("Building writing page")
        content = render(templates['writing.html'], dict(self.page_context(), post_list=post_list_html(self.posts)))
        title = self.page_title('Writing')
        description = f"All posts by {self.config.author_name}."
        page = assembler.assemble(content, title=title, description=description,
                                  canonical=f"{self.config.site_url}/writing/", depth=1)
        self.stage(os.path.join('writing', 'index.html'), page)
        self.pages_generated += 1

    def build_home_page(self, templates, assembler):
        self.logger.info("Building home page")
        recent = self.posts[:self.config.recent_posts]
        content = render(templates['home.html'], dict(self.page_context(), recent_posts=post_list_html(recent)))
        page = assembler.assemble(content, title=self.config.site_title,
                                  description=self.config.site_description,
                                  canonical=f"{self.config.site_url}/", depth=0)
        self.stage('index.html', page)
        self.pages_generated += 1

    def build_about_page(self, templates, assembler):
        self.logger.info("Building about page")
        content = render(templates['about.html'], self.page_context())
        page = assembler.assemble(content, title=self.page_title('About'),
                                  description=f"About {self.config.author_name}.",
                                  canonical=f"{self.config.site_url}/about/", depth=1,
                                  json_ld_extra=person_json_ld(self.config))
        self.stage(os.path.join('about', 'index.html'), page)
        self.pages_generated += 1

    def build_now_page(self, templates, assembler):
        self.logger.info("Building now page")
        content = render(templates['now.html'], self.page_context())
        page = assembler.assemble(content, title=self.page_title('Now'),
                                  description=f"What {self.config.author_name} is doing now.",
                                  canonical=f"{self.config.site_url}/now/", depth=1)
        self.stage(os.path.join('now', 'index.html'), page)
        self.pages_generated += 1

    def build_404_page(self, templates, assembler):
        self.logger.info("Building 404 page")
        content = render(templates['404.html'], self.page_context())
        description = 'The page you are looking for does not exist.'
        page = assembler.assemble(content, title=self.page_title('Page not found'),
                                  description=description,
                                  canonical=f"{self.config.site_url}/404.html",
                                  og_title='Page not found', depth=0)
        self.stage('404.html', page)
        self.pages_generated += 1

    def generate_rss_feed(self):
        self.stage('rss.xml', generate_rss_feed(self.config, self.posts))
        self.logger.info("Generating RSS feed")

    def generate_xml_sitemap(self):
        self.stage('sitemap.xml', generate_xml_sitemap(self.config, self.posts, self.build_date))
        self.logger.info("Generating XML sitemap")

    def generate_robots_txt(self):
        self.stage('robots.txt', generate_robots_txt(self.config))
        self.logger.info("Generating robots.txt")

    def generate_cname(self):
        self.stage('CNAME', generate_cname(self.config))
        self.logger.info("Generating CNAME")

    def copy_assets_to_output(self):
        """Copy the assets directory to <output>/assets."""
        if not self.assets_dir or not os.path.isdir(self.assets_dir):
            self.logger.warning(f"Assets directory not found, skipping: {self.assets_dir}")
            return
        shutil.copytree(self.assets_dir, os.path.join(self.output_dir, 'assets'))
        self.logger.info(f"Copied assets from {self.assets_dir}")

    def minify_assets(self):
        """Write .min.css / .min.js companions for every copied asset."""
        assets_output_dir = os.path.join(self.output_dir, 'assets')
        count = 0
        for dirpath, _, filenames in os.walk(assets_output_dir):
            for file in filenames:
                if file.endswith('.css') and not file.endswith('.min.css'):
                    minify, minified_name = csscompressor.compress, file[:-len('.css')] + '.min.css'
                elif file.endswith('.js') and not file.endswith('.min.js'):
                    minify, minified_name = rjsmin.jsmin, file[:-len('.js')] + '.min.js'
                else:
                    continue
                with open(os.path.join(dirpath, file), 'r', encoding='utf-8') as f:
                    source = f.read()
                with open(os.path.join(dirpath, minified_name), 'w', encoding='utf-8') as f:
                    f.write(minify(source))
                self.logger.debug(f"Minified {file}")
                count += 1
        self.logger.info(f"Minified assets: {count} file(s)")

    def build(self):
        """
        Main build process.

        Every document is parsed and every page rendered before the output
        directory is touched, so a bad document or template leaves the
        previous build in place.
        """
        self.logger.info("Starting site build...")
        self.posts_generated = 0
        self.pages_generated = 0

        self.load_posts()
        templates = self.load_templates()
        assembler = PageAssembler(self.config, templates['base.html'], year=self.build_date.year)

        self.outputs = {}
        self.build_post_pages(templates, assembler)
        self.build_writing_page(templates, assembler)
        self.build_home_page(templates, assembler)
        self.build_about_page(templates, assembler)
        self.build_now_page(templates, assembler)
        self.build_404_page(templates, assembler)

        self.generate_rss_feed()
        self.generate_xml_sitemap()
        self.generate_robots_txt()
        self.generate_cname()

        self.create_output_dir()
        for relative_path, content in self.outputs.items():
            self.write_file(relative_path, content)
        self.copy_assets_to_output()
        if self.config.minify:
            self.minify_assets()
