"""
End-to-end tests for the command line entry point and config handling.
"""

import json

import pytest

from bloggen import cli
from bloggen.config import DEFAULT_BASE_URL, load_config, resolve_base_url


@pytest.fixture
def site_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BASE_URL", raising=False)
    monkeypatch.setattr(cli, "resolve_date", lambda root, name: "2024-01-01")
    (tmp_path / "index.html").write_text("<h1>Home</h1>", encoding="utf-8")
    (tmp_path / "blog_post_hello.html").write_text(
        '<h1>Hello</h1><meta name="description" content="World">', encoding="utf-8"
    )
    return tmp_path


class TestMain:
    def test_writes_three_artifacts(self, site_dir, capsys):
        """Test: A run writes the index, sitemap and robots file."""
        cli.main(["--base-url", "https://blog.example.org/"])
        index = (site_dir / "blog_index.html").read_text(encoding="utf-8")
        sitemap = (site_dir / "sitemap.xml").read_text(encoding="utf-8")
        robots = (site_dir / "robots.txt").read_text(encoding="utf-8")
        assert 'href="/blog_post_hello"' in index
        assert "<loc>https://blog.example.org/blog_post_hello</loc>" in sitemap
        assert sitemap.count("<url>") == 3
        assert "Sitemap: https://blog.example.org/sitemap.xml" in robots
        out = capsys.readouterr().out
        assert "generated: blog_index.html" in out
        assert "generated: sitemap.xml" in out
        assert "generated: robots.txt" in out

    def test_rerun_does_not_pick_up_index(self, site_dir):
        """Test: The generated index is not collected as a post on the next run."""
        cli.main(["--post-prefix", "blog_"])
        cli.main(["--post-prefix", "blog_"])
        sitemap = (site_dir / "sitemap.xml").read_text(encoding="utf-8")
        assert sitemap.count("<url>") == 3

    def test_base_url_from_environment(self, site_dir, monkeypatch):
        """Test: BASE_URL is used when no flag is given."""
        monkeypatch.setenv("BASE_URL", "https://env.example.org")
        cli.main(["--quiet"])
        assert "Sitemap: https://env.example.org/sitemap.xml" in (site_dir / "robots.txt").read_text(encoding="utf-8")

    def test_dry_run_writes_nothing(self, site_dir, capsys):
        """Test: --dry-run renders but leaves the directory untouched."""
        cli.main(["--dry-run"])
        assert not (site_dir / "sitemap.xml").exists()
        assert "would generate: sitemap.xml" in capsys.readouterr().out

    def test_config_file(self, site_dir):
        """Test: Options are read from site.toml."""
        (site_dir / "site.toml").write_text(
            'base_url = "https://toml.example.org"\nsite_name = "Toml Blog"\n', encoding="utf-8"
        )
        cli.main([])
        index = (site_dir / "blog_index.html").read_text(encoding="utf-8")
        assert "https://toml.example.org/blog_index" in index
        assert "Toml Blog" in index

    def test_unreadable_post_aborts_before_writing(self, site_dir, capsys):
        """Test: A bad post exits with status 1 and writes no artifact."""
        (site_dir / "blog_post_bad.html").write_bytes(b"\xff\xfe")
        with pytest.raises(SystemExit) as excinfo:
            cli.main([])
        assert excinfo.value.code == 1
        assert not (site_dir / "blog_index.html").exists()
        assert "Failed to collect posts" in capsys.readouterr().err

    def test_missing_root(self, site_dir, capsys):
        """Test: A missing root directory is fatal."""
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--root", str(site_dir / "nope")])
        assert excinfo.value.code == 1
        assert capsys.readouterr().err.startswith("Failed to open root directory")


class TestConfig:
    def test_missing_file(self, tmp_path):
        """Test: A missing config file is an empty mapping."""
        assert load_config(tmp_path / "site.toml") == {}

    def test_yaml_and_json(self, tmp_path):
        """Test: YAML and JSON configs load as mappings."""
        (tmp_path / "site.yaml").write_text("base_url: https://y.example.org\n", encoding="utf-8")
        (tmp_path / "site.json").write_text(json.dumps({"site_name": "J"}), encoding="utf-8")
        assert load_config(tmp_path / "site.yaml") == {"base_url": "https://y.example.org"}
        assert load_config(tmp_path / "site.json") == {"site_name": "J"}

    def test_invalid_toml_exits(self, tmp_path):
        """Test: Broken TOML is fatal."""
        (tmp_path / "site.toml").write_text("base_url = ", encoding="utf-8")
        with pytest.raises(SystemExit):
            load_config(tmp_path / "site.toml")

    def test_non_utf8_config_exits(self, tmp_path, capsys):
        """Test: A config file that is not UTF-8 is fatal, not a traceback."""
        (tmp_path / "site.json").write_bytes(b'{"site_name": "\xff"}')
        with pytest.raises(SystemExit) as excinfo:
            load_config(tmp_path / "site.json")
        assert excinfo.value.code == 1
        assert "not valid UTF-8" in capsys.readouterr().err

    def test_base_url_single_trailing_slash(self):
        """Test: Only one trailing slash is removed from the base url."""
        assert resolve_base_url("https://x.example.org/", {}, {}) == "https://x.example.org"
        assert resolve_base_url("https://x.example.org/blog//", {}, {}) == "https://x.example.org/blog/"

    def test_base_url_precedence(self):
        """Test: Flag beats environment, environment beats config."""
        config = {"base_url": "https://config.example.org"}
        env = {"BASE_URL": "https://env.example.org/"}
        assert resolve_base_url("https://flag.example.org", config, env) == "https://flag.example.org"
        assert resolve_base_url(None, config, env) == "https://env.example.org"
        assert resolve_base_url(None, config, {}) == "https://config.example.org"
        assert resolve_base_url(None, {}, {}) == DEFAULT_BASE_URL
