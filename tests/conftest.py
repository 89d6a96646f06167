from __future__ import annotations

from pathlib import Path

import pytest

from htmlstruct import parse_html

CATALOGUE_HTML = """
<html>
  <head><title>Spring Catalogue | Shop</title></head>
  <body>
    <h1 class="title">
        Spring Catalogue
    </h1>
    <a class="self" href="https://shop.example/catalogue/spring-2024/">permalink</a>
    <p class="intro">Fresh <b>kitchen</b> picks</p>
    <div class="product">
      <a class="link" href="/products/1001">Blue Kettle</a>
      <span class="price"> 24.99 </span>
      <span class="stock">in stock</span>
    </div>
    <div class="product">
      <a class="link" href="/products/1002">Red Toaster</a>
      <span class="price">39.00</span>
    </div>
    <div class="product">
      <a class="link" href="/products/1003">Green Mug</a>
      <span class="price">   </span>
    </div>
  </body>
</html>
"""


@pytest.fixture
def catalogue_html() -> str:
    return CATALOGUE_HTML


@pytest.fixture
def catalogue_doc():
    return parse_html(CATALOGUE_HTML)


@pytest.fixture
def catalogue_file(tmp_path: Path) -> Path:
    path = tmp_path / "catalogue.html"
    path.write_text(CATALOGUE_HTML, encoding="utf-8")
    return path
