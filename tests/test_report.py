from countrydistance.report import lookup_country_name, print_summary, render_report


def test_render_report_is_sorted_with_two_decimals():
    report = {
        "us": {"2024-03-02": 1.005, "2024-03-01": 5.0},
        "fr": {"2024-03-01": 3.0},
    }

    assert render_report(report) == [
        "Total distance traveled in each country per day (in kilometers):",
        "Country: fr",
        "  2024-03-01: 3.00 km",
        "Country: us",
        "  2024-03-01: 5.00 km",
        "  2024-03-02: 1.00 km",
    ]


def test_render_empty_report_has_only_header():
    assert render_report({}) == ["Total distance traveled in each country per day (in kilometers):"]


def test_lookup_country_name():
    assert lookup_country_name("fr") == "France"
    assert lookup_country_name("") == "Unknown"
    assert lookup_country_name("zz") == "ZZ"


def test_print_summary_lists_totals(capsys):
    print_summary({"fr": {"2024-03-01": 3.0, "2024-03-02": 1.5}, "us": {"2024-03-01": 5.0}})

    out = capsys.readouterr().out
    assert "France (fr): 4.50 km over 2 days" in out
    assert "(us): 5.00 km over 1 day\n" in out
