from phish_triage.domain.url.extract import (
    extract_domains,
    extract_email_addresses,
    extract_href_urls,
    extract_urls,
    url_hostname,
)


def test_extract_urls_from_text():
    urls = extract_urls("please verify https://bit.ly/reset. and https://example.com, or https://bit.ly/reset")
    assert urls == ["https://bit.ly/reset", "https://example.com"]


def test_href_targets_must_start_with_http():
    html = "<a href='https://a.example/x'>a</a><a href=\"ftp://b.example\">b</a><a href=\"#top\">c</a>"
    assert extract_href_urls(html) == ["https://a.example/x"]


def test_domains_come_from_urls_and_bare_tokens():
    domains = extract_domains(["https://Login.Example.COM/path"], "visit shop.example.org or see banner.png and site.css")
    assert domains == ["login.example.com", "shop.example.org"]


def test_url_hostname_tolerates_malformed_urls():
    assert url_hostname("https://Mail.Example.com:8443/x") == "mail.example.com"
    assert url_hostname("http://[broken") is None
    assert url_hostname("not a url") is None


def test_email_addresses_are_lowercased_and_deduplicated():
    found = extract_email_addresses("Write to Bob@Example.com", ["bob@example.com", "Eve <eve@evil.net>"])
    assert found == ["bob@example.com", "eve@evil.net"]
