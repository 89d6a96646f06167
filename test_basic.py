#!/usr/bin/env python3
"""
Basic test script to verify htmlstruct setup and imports.
Run this to make sure everything is configured correctly.
"""

import sys
import traceback

SAMPLE_HTML = """
<html><body>
  <h1>  2021 Toyota Highlander XLE </h1>
  <a class="vdp" href="https://listings.example/vehicle/5TDGZRBHXMS103005">details</a>
  <ul>
    <li class="result"><a href="/vehicle/1HGCM82633A123456">Accord</a><span>$9,500</span></li>
    <li class="result"><a href="/vehicle/WBAFR7C59BC123456">5 Series</a><span>$12,000</span></li>
  </ul>
</body></html>
"""


def test_imports():
    """Test that all modules can be imported"""
    print("🧪 Testing htmlstruct imports...")

    print("  ✓ Importing config...")
    from htmlstruct.config import config

    print("  ✓ Importing models...")
    from htmlstruct.models import ExtractionReport

    print("  ✓ Importing tag parser...")
    from htmlstruct.tags import parse_tag, tagged

    print("  ✓ Importing selector resolver...")
    from htmlstruct.selectors import parse_html, resolve_one

    print("  ✓ Importing mapper...")
    from htmlstruct.mapper import RecordMapper

    print("  ✓ Importing CLI...")
    from htmlstruct.cli import cli

    print("✅ All imports successful!")


def test_configuration():
    """Test configuration loading"""
    print("\n🔧 Testing configuration...")

    from htmlstruct.config import config

    print(f"  ✓ Tag Key: {config.TAG_KEY}")
    print(f"  ✓ Tag Metadata: {config.TAG_METADATA}")
    print(f"  ✓ ID Marker: {config.ID_MARKER}")

    config.validate()
    print("✅ Configuration validation passed!")


def test_tag_parsing():
    """Test tag grammar"""
    print("\n🔍 Testing tag parsing...")

    from htmlstruct import TagSyntaxError, parse_tag

    valid_tags = [
        'xpath:"//h1"',
        'json:"vin" xpath:"//a/@href"',
        'XPATH:"-"',
    ]

    for tag in valid_tags:
        assert 'xpath' in parse_tag(tag), f"Expected valid tag failed: {tag}"
        print(f"  ✓ Valid tag: {tag}")

    invalid_tags = [
        'xpath',
        'xpath:"//h1',
        'xpath=//h1',
    ]

    for tag in invalid_tags:
        try:
            parse_tag(tag)
        except TagSyntaxError:
            print(f"  ✓ Invalid tag correctly rejected: {tag}")
        else:
            raise AssertionError(f"Expected invalid tag passed: {tag}")

    print("✅ Tag parsing tests passed!")


def test_extraction():
    """Test record extraction"""
    print("\n📊 Testing extraction...")

    import dataclasses
    from htmlstruct import build_many_from_text, build_one_from_text, tagged

    @dataclasses.dataclass
    class Vehicle:
        title: str = tagged('xpath:"//h1"', default="")
        vehicleID: str = tagged('xpath:"//a[@class=\'vdp\']/@href"', default="")

    @dataclasses.dataclass
    class Result:
        model: str = tagged('xpath:".//a"', default="")
        price: str = tagged('xpath:".//span"', default="")
        vehicleID: str = tagged('xpath:".//a/@href"', default="")

    vehicle = build_one_from_text(Vehicle, SAMPLE_HTML)
    assert vehicle == Vehicle(title="2021 Toyota Highlander XLE", vehicleID="5TDGZRBHXMS103005")
    print(f"  ✓ Extracted vehicle: {vehicle.title} ({vehicle.vehicleID})")

    results = build_many_from_text(Result, SAMPLE_HTML, "//li[@class='result']")
    assert [r.vehicleID for r in results] == ["1HGCM82633A123456", "WBAFR7C59BC123456"]
    print(f"  ✓ Extracted {len(results)} search results")

    print("✅ Extraction tests passed!")


def main():
    """Run all basic tests"""
    print("🚀 htmlstruct Basic Test Suite")
    print("=" * 50)

    all_passed = True

    # Run tests
    tests = [
        test_imports,
        test_configuration,
        test_tag_parsing,
        test_extraction
    ]

    for test in tests:
        try:
            test()
        except Exception as e:
            print(f"❌ {test.__name__} failed: {e}")
            traceback.print_exc()
            all_passed = False

    print("\n" + "=" * 50)
    if all_passed:
        print("🎉 All basic tests passed! htmlstruct is ready to use.")
        print("\nNext steps:")
        print("1. Try: htmlstruct config-info")
        print("2. Try: htmlstruct extract page.html -f title=//h1")
    else:
        print("❌ Some tests failed. Check the errors above.")
        sys.exit(1)


if __name__ == "__main__":
    main()
