import os

import pytest

from pagecard import config as config_module


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from real config files, env vars and the cached config."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ.keys()):
        if key.startswith("PAGECARD_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config_module, "_config", None)
    yield


@pytest.fixture
def sample_html():
    """A page with Open Graph and Twitter card metatags."""
    return """
<!DOCTYPE html>
<html xmlns:og="http://ogp.me/ns#">
<head>
    <meta charset="utf-8">
    <meta http-equiv="X-UA-Compatible" content="IE=edge">
    <title>The Rock</title>
    <meta property="og:title" content="The Rock" />
    <meta property="og:type" content="video.movie" />
    <meta property="og:url" content="https://www.imdb.com/title/tt0117500/" />
    <meta property="og:image" content="https://example.com/rock.jpg" />
    <meta property="og:image:width" content="400" />
    <meta property="og:image:height" content="300" />
    <meta property="og:image" content="https://example.com/rock2.jpg" />
    <meta property="og:locale" content="en_US" />
    <meta property="og:locale:alternate" content="fr_FR" />
    <meta name="twitter:card" content="summary_large_image" />
    <meta name="twitter:site" content="@imdb" />
    <meta name="twitter:title" content="The Rock (1996)" />
    <meta name="twitter:image" content="https://example.com/rock.jpg" />
</head>
<body>
  <meta property="og:title" content="not in head" />
</body>
</html>
"""
