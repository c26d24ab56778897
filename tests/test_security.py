"""Security tests for Inkwell."""

import pytest
import os
from pathlib import Path

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from inkwell_pkg.converter import markdown_to_html
from inkwell_pkg.core import Inkwell
from inkwell_pkg.errors import ValidationError
from inkwell_pkg.settings import InkwellSettings
from inkwell_pkg.url_validator import URLValidator, is_safe_url

from conftest import post_source


class TestSecurity:
    """Test cases for security features."""

    def test_url_validation_blocks_script_schemes(self):
        """Test that script-capable schemes are blocked."""
        dangerous_urls = [
            'javascript:alert(1)',
            'JavaScript:alert(1)',
            '  javascript:alert(1)',
            'java\tscript:alert(1)',
            'vbscript:msgbox(1)',
            'data:text/html;base64,PHNjcmlwdD4=',
            '\x00javascript:alert(1)',
            'ftp://example.com/file',
            'file:///etc/passwd',
            '',
        ]

        for url in dangerous_urls:
            assert not is_safe_url(url), url

    def test_url_validation_allows_safe_urls(self):
        """Test that ordinary links are allowed."""
        safe_urls = [
            'https://example.com/page',
            'HTTP://EXAMPLE.COM',
            'mailto:someone@example.com',
            '#section',
            '/posts/hello-world/',
        ]

        for url in safe_urls:
            assert is_safe_url(url), url

    def test_url_validation_non_string(self):
        assert not is_safe_url(None)
        assert not is_safe_url(42)

    def test_custom_prefixes(self):
        validator = URLValidator(safe_prefixes=('https://',))

        assert validator.is_safe('https://example.com')
        assert not validator.is_safe('http://example.com')

    @pytest.mark.parametrize('payload', [
        '<script>alert(1)</script>',
        '<img src=x onerror=alert(1)>',
        '"><svg onload=alert(1)>',
        '<iframe src="https://evil.example"></iframe>',
    ])
    def test_prose_cannot_inject_markup(self, payload):
        """Test no tag from prose survives conversion."""
        html = markdown_to_html(f'Hello {payload}\n\n- {payload}\n\n> {payload}\n\n# {payload}')

        for tag in ('<script', '<img', '<svg', '<iframe'):
            assert tag not in html

    def test_markdown_links_cannot_inject_scripts(self):
        html = markdown_to_html('[click](javascript:alert(document.cookie)) ![x](data:text/html,hi)')

        assert 'href=' not in html
        assert 'src=' not in html

    def test_link_attribute_breakout(self):
        """Test escaped quotes keep the URL inside the href attribute."""
        html = markdown_to_html('[x](https://a.com/" onclick="alert(1))')

        assert '" onclick="' not in html

    def test_code_fence_content_escaped(self):
        html = markdown_to_html('```html\n<script>alert(1)</script>\n```')

        assert '<script>' not in html
        assert '&lt;script&gt;alert(1)&lt;/script&gt;' in html

    def test_path_traversal_protection(self, site_config, mock_content_dir, mock_templates_dir,
                                       mock_output_dir, temp_dir, write_post):
        """Test slugs can never point a post outside the output directory."""
        write_post('evil.md', post_source(slug='../../pwned'))
        generator = Inkwell(config=site_config, content_dir=mock_content_dir,
                            templates_dir=mock_templates_dir, output_dir=mock_output_dir)

        with pytest.raises(ValidationError, match='Invalid slug'):
            generator.build()
        assert not os.path.exists(os.path.join(temp_dir, 'pwned'))
        assert not os.path.exists(mock_output_dir)

    def test_json_ld_script_breakout(self, site_config, mock_content_dir, mock_templates_dir,
                                     mock_output_dir, write_post):
        """Test a post title cannot close the structured data script tag."""
        write_post('x.md', post_source(slug='x', title='</script><script>alert(1)</script>'))
        Inkwell(config=site_config, content_dir=mock_content_dir, templates_dir=mock_templates_dir,
                output_dir=mock_output_dir).build()

        page = Path(mock_output_dir, 'posts', 'x', 'index.html').read_text(encoding='utf-8')
        assert '</script><script>alert(1)</script>' not in page
        assert '\\u003c/script>\\u003cscript>alert(1)\\u003c/script>' in page

    def test_yaml_safe_loading(self, temp_dir):
        """Test that YAML config files are loaded safely."""
        marker = os.path.join(temp_dir, 'executed')
        Path(temp_dir, 'inkwell.yml').write_text(f"""
!!python/object/apply:os.system
- "touch {marker}"
""")

        with pytest.raises(ValueError, match='Invalid YAML'):
            InkwellSettings(config_dir=temp_dir).load_settings()
        assert not os.path.exists(marker)
