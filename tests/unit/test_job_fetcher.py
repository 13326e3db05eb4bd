from __future__ import annotations

import requests

from bidforge.core import job_fetcher
from bidforge.core.job_fetcher import fetch_job_description, html_to_job_text

PAGE = """
<html>
  <head><title>Careers</title><style>.x { color: red }</style></head>
  <body>
    <nav>Home | Jobs | About</nav>
    <main>
      <h1>Senior Backend Engineer</h1>
      <p>Acme Corp is hiring.</p>
      <script>track()</script>
      <ul><li>Python</li><li>PostgreSQL</li></ul>
    </main>
    <footer>Copyright</footer>
  </body>
</html>
"""


def test_html_to_job_text_prefers_main_content() -> None:
    text = html_to_job_text(PAGE)

    assert text.splitlines() == ["Senior Backend Engineer", "Acme Corp is hiring.", "Python", "PostgreSQL"]


def test_html_to_job_text_without_main_region() -> None:
    assert html_to_job_text("<body><p>Data Analyst</p><script>x()</script></body>") == "Data Analyst"


def test_fetch_failure_returns_empty_text(monkeypatch) -> None:
    def fail(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(job_fetcher.requests, "get", fail)

    assert fetch_job_description("https://jobs.example.com/1") == ""
