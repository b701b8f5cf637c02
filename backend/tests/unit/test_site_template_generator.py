"""Unit tests for the static site generator."""

import pytest

from fakes import make_client
from sitelaunch.domain.entities import Industry
from sitelaunch.domain.exceptions import UnknownTemplateError
from sitelaunch.infrastructure.rendering import SiteTemplateGenerator

CONTACT_BASE = "https://app.example.com/api/v1"


@pytest.fixture
def generator() -> SiteTemplateGenerator:
    return SiteTemplateGenerator(contact_base_url=CONTACT_BASE)


def _record(template: str, **overrides):
    return make_client(industry=Industry(template), **overrides)


@pytest.mark.parametrize("template", ["restaurant", "salon", "plumber"])
def test_every_variant_renders_the_shared_sections(generator, template):
    html = generator.generate(template, _record(template), year=2031)

    assert html.startswith("<!DOCTYPE html>")
    assert "<h1" in html and "Joe&#39;s Pizza</h1>" in html
    assert "About Us" in html
    assert "A decade of great pizza." in html
    for service in ("Pizza", "Pasta", "Salad"):
        assert service in html
    assert "Contact Us" in html
    assert 'href="tel:5551234567"' in html
    assert "mailto:owner@joespizza.com" in html
    assert "&copy; 2031 Joe&#39;s Pizza. All rights reserved." in html
    assert '"https://app.example.com/api/v1/sites/joes-pizza/contact"' in html


@pytest.mark.parametrize("template", ["restaurant", "salon", "plumber"])
def test_generation_is_deterministic(generator, template):
    record = _record(template, address="1 Main St", hours={"monday": "9-5"})
    first = generator.generate(template, record, year=2030)
    second = generator.generate(template, record, year=2030)
    assert first == second


def test_year_defaults_to_current_year(generator):
    from datetime import datetime, timezone

    html = generator.generate("restaurant", _record("restaurant"))
    assert f"&copy; {datetime.now(timezone.utc).year} " in html


def test_unknown_template_is_a_hard_error(generator):
    with pytest.raises(UnknownTemplateError, match="Unknown template ID: bakery"):
        generator.generate("bakery", _record("restaurant"))


def test_restaurant_variant(generator):
    html = generator.generate("restaurant", _record("restaurant", address="1 Main St, Springfield"))
    assert "Delicious food, great atmosphere" in html
    assert "Our Menu" in html
    assert "Visit Us" in html
    assert "https://maps.google.com/?q=1%20Main%20St%2C%20Springfield" in html
    assert "Call Now: (555) 123-4567" in html


def test_location_section_is_gated_on_address(generator):
    assert "Visit Us" not in generator.generate("restaurant", _record("restaurant"))
    assert "Service Area" not in generator.generate("plumber", _record("plumber"))


def test_salon_variant(generator):
    html = generator.generate(
        "salon",
        _record("salon", hours={"monday": "9:00 - 17:00", "sunday": ""}),
    )
    assert "Your beauty is our passion" in html
    assert "Book Appointment" in html
    assert "Business Hours" in html
    assert "9:00 - 17:00" in html
    assert "Closed" in html
    assert html.index(">monday<") < html.index(">sunday<")
    assert "Gallery" in html
    assert 'name="preferredDate"' in html


def test_salon_hours_section_is_gated(generator):
    assert "Business Hours" not in generator.generate("salon", _record("salon"))


@pytest.mark.parametrize(
    "hours",
    [{}, dict.fromkeys(("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"))],
)
def test_salon_hours_section_hidden_when_no_day_is_filled(generator, hours):
    html = generator.generate("salon", _record("salon", hours=hours))

    assert "Business Hours" not in html
    assert "Closed" not in html


def test_plumber_variant(generator):
    html = generator.generate("plumber", _record("plumber", address="Springfield"))
    assert "Professional plumbing services you can trust" in html
    assert "Emergency: (555) 123-4567" in html
    assert "Service Area" in html
    assert "Available 24/7" in html
    assert "Request a Quote" in html
    assert '<option value="Pasta">Pasta</option>' in html
    assert '<option value="other">Other</option>' in html


def test_social_links_section_only_for_non_empty_links(generator):
    bare = generator.generate("salon", _record("salon", social_links={"facebook": "", "website": ""}))
    assert "Follow Us" not in bare

    html = generator.generate(
        "salon",
        _record("salon", social_links={"instagram": "https://instagram.com/joes", "facebook": ""}),
    )
    assert "Follow Us" in html
    assert 'href="https://instagram.com/joes"' in html
    assert ">Facebook<" not in html


def test_non_web_social_links_are_dropped(generator):
    html = generator.generate(
        "salon", _record("salon", social_links={"website": "javascript:alert(1)"})
    )
    assert "javascript:alert" not in html


def test_business_text_is_escaped(generator):
    record = _record(
        "restaurant",
        business_name="<script>alert('x')</script>",
        about_us="Best <b>pizza</b> in town & more",
        services=["<img src=x onerror=alert(1)>", "Pasta", "Salad"],
        address="<i>1 Main St</i>",
    )

    html = generator.generate("restaurant", record)

    assert "<script>alert" not in html
    assert "&lt;script&gt;" in html
    assert "Best &lt;b&gt;pizza&lt;/b&gt; in town &amp; more" in html
    assert "<img src=x" not in html
    assert "<i>1 Main St</i>" not in html


def test_meta_description_uses_first_160_chars(generator):
    about = "a" * 150 + "b" * 50
    html = generator.generate("plumber", _record("plumber", about_us=about))
    assert f'content="Joe&#39;s Pizza - {"a" * 150}{"b" * 10}"' in html


def test_form_posts_to_server_without_duplicated_rules(generator):
    html = generator.generate("restaurant", _record("restaurant"))
    assert "fetch(CONTACT_URL" in html
    assert "at least 10 digits" not in html
    assert "Please enter a valid email" not in html
