"""End-to-end checks: parse, match, configure, evaluate."""

import logging

import pytest

from baseline_buddy import ConfigError, EffectiveConfig, Severity, SourceDocument, check_compatibility
from baseline_buddy.config import build_config
from baseline_buddy.issue import Occurrence
from baseline_buddy.main_checker import BaselineChecker

from helpers import check_source


def _config(**overrides):
    data = {"baseline": {"target": "2024"}, "severity": {"default": "warning"}}
    data.update(overrides)
    return build_config(data)


def test_optional_chain_and_nullish_are_reported():
    diagnostics = check_source("const v = a?.b ?? c;\n", "app.js")
    assert sorted((d.feature, d.severity) for d in diagnostics) == [
        ("nullish-coalescing", Severity.WARNING),
        ("optional-chaining", Severity.WARNING),
    ]
    optional = next(d for d in diagnostics if d.feature == "optional-chaining")
    assert (optional.file, optional.line, optional.column) == ("app.js", 1, 11)
    assert optional.baseline == "newly"
    assert optional.message == (
        "Optional chaining (?.) requires modern browsers"
        " - Newly supported since 2022-03 - consider your browser targets"
    )


def test_rule_severity_applies_to_stylesheets():
    config = _config(rules={"css-has-selector": {"severity": "error"}})
    (diagnostic,) = check_source(".card:has(.x) {}", "site.css", config)
    assert diagnostic.feature == "css-has-selector"
    assert diagnostic.severity is Severity.ERROR


def test_unknown_feature_is_reported_with_unknown_status():
    (diagnostic,) = check_source(".a { translate: 10px; }", "site.css")
    assert diagnostic.feature == "css-individual-transform-properties"
    assert diagnostic.baseline == "unknown"
    assert diagnostic.severity is Severity.WARNING
    assert diagnostic.message.endswith(" - Unknown baseline status")
    assert diagnostic.fixes == ()


def test_baseline_features_never_appear():
    # dynamic import has full engine coverage; aspect-ratio and inset are
    # newly since 2022 without engine data.
    source = "const m = await import('./m.js');\n"
    diagnostics = check_source(source, "app.mjs")
    assert [d.feature for d in diagnostics] == ["top-level-await"]
    assert check_source(".a { aspect-ratio: 1; inset: 0; }", "site.css") == []


def test_limited_features_default_to_error():
    (diagnostic,) = check_source("navigator.share({ url });\n", "share.js")
    assert diagnostic.feature == "web-share"
    assert diagnostic.baseline == "limited"
    assert diagnostic.severity is Severity.ERROR


def test_idempotent():
    checker = BaselineChecker()
    document = SourceDocument("app.js", "const v = a?.b ?? c;\n")
    assert checker.check_units([document]) == checker.check_units([document])


def test_ignore_suppresses_feature_everywhere():
    config = _config(severity={"default": "warning", "features": {"optional-chaining": "ignore"}})
    diagnostics = check_source("const v = a?.b ?? c;\n", "app.js", config)
    assert [d.feature for d in diagnostics] == ["nullish-coalescing"]


@pytest.mark.parametrize("features,rules", [
    ({"nullish-coalescing": "ignore"}, {"nullish-coalescing": {"severity": "error"}}),
    ({"nullish-coalescing": "error"}, {"nullish-coalescing": {"severity": "ignore"}}),
])
def test_ignore_wins_over_severity_at_other_level(features, rules):
    config = _config(severity={"default": "warning", "features": features}, rules=rules)
    assert check_source("const x = a ?? b;\n", "a.js", config) == []


def test_rule_message_replaces_base_message():
    config = _config(rules={"nullish-coalescing": {"message": "Use || here"}})
    (diagnostic,) = check_source("const v = a ?? b;\n", "app.js", config)
    assert diagnostic.message.startswith("Use || here - ")


def test_rule_severity_beats_feature_severity():
    config = _config(
        severity={"default": "info", "features": {"nullish-coalescing": "info"}},
        rules={"nullish-coalescing": {"severity": "error"}},
    )
    (diagnostic,) = check_source("const v = a ?? b;\n", "app.js", config)
    assert diagnostic.severity is Severity.ERROR


def test_default_severity_overrides_status_severity():
    config = _config(severity={"default": "info"})
    (diagnostic,) = check_source("navigator.share({ url });\n", "share.js", config)
    assert diagnostic.severity is Severity.INFO


def test_mdn_fix_attached_when_known():
    (diagnostic,) = check_source("const v = a ?? b;\n", "app.js")
    (fix,) = diagnostic.fixes
    assert fix.type == "documentation"
    assert fix.url == (
        "https://developer.mozilla.org/en-US/docs/"
        "Web/JavaScript/Reference/Operators/Nullish_coalescing"
    )
    record = diagnostic.to_dict()
    assert record["browserSupport"] == ["chrome", "firefox", "safari"]
    assert record["fixes"][0]["url"] == fix.url


def test_custom_target():
    config = _config(baseline={"target": "custom", "browserslist": ["chrome >= 121"]})
    assert check_source("const v = a?.b ?? c;\n", "app.js", config) == []


def test_files_are_read_and_missing_files_skipped(tmp_path, caplog):
    good = tmp_path / "app.js"
    good.write_text("const v = a ?? b;\n", encoding="utf-8")
    missing = tmp_path / "gone.js"
    with caplog.at_level(logging.WARNING):
        diagnostics = check_compatibility([str(missing), str(good)], workspace_root=tmp_path)
    assert [(d.file, d.feature) for d in diagnostics] == [(str(good), "nullish-coalescing")]
    assert "gone.js" in caplog.text


def test_unknown_extension_yields_nothing(tmp_path):
    notes = tmp_path / "notes.txt"
    notes.write_text("a?.b", encoding="utf-8")
    assert check_compatibility([notes], workspace_root=tmp_path) == []


def test_exclude_patterns_skip_paths(tmp_path):
    vendor = tmp_path / "node_modules" / "lib"
    vendor.mkdir(parents=True)
    (vendor / "index.js").write_text("a ?? b;\n", encoding="utf-8")
    skipped = tmp_path / "skip.min.js"
    skipped.write_text("a ?? b;\n", encoding="utf-8")
    config = _config(exclude=["**/node_modules/**", "*.min.js"])
    checker = BaselineChecker(config)
    assert checker.check_units([vendor / "index.js", skipped]) == []


def test_default_exclude_applies_without_config(tmp_path):
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "bundle.js").write_text("a ?? b;\n", encoding="utf-8")
    assert check_compatibility([dist / "bundle.js"], workspace_root=tmp_path) == []


def test_documents_are_never_excluded():
    checker = BaselineChecker()
    document = SourceDocument("node_modules/x/index.js", "a ?? b;\n")
    assert len(checker.check_units([document])) == 1


def test_language_id_wins_over_extension():
    diagnostics = check_compatibility(
        [{"filename": "untitled-1", "content": "a ?? b;\n", "languageId": "javascript"}]
    )
    assert [d.feature for d in diagnostics] == ["nullish-coalescing"]


def test_syntax_error_unit_does_not_stop_the_batch():
    checker = BaselineChecker()
    diagnostics = checker.check_units([
        SourceDocument("broken.js", "const = ;"),
        SourceDocument("ok.js", "a ?? b;\n"),
    ])
    assert [d.file for d in diagnostics] == ["ok.js"]


def test_parallel_run_keeps_input_order():
    documents = [SourceDocument(f"f{i}.js", "a ?? b;\n") for i in range(8)]
    checker = BaselineChecker()
    parallel = checker.check_units(documents, max_workers=4)
    assert [d.file for d in parallel] == [f"f{i}.js" for i in range(8)]
    assert parallel == checker.check_units(documents)


def test_iter_units_yields_per_unit():
    checker = BaselineChecker()
    results = list(checker.iter_units([
        SourceDocument("a.js", "a ?? b;\n"),
        SourceDocument("b.css", ".a { color: red; }"),
    ]))
    assert [len(r) for r in results] == [1, 0]


def test_config_error_raised_before_checking(tmp_path, write_config):
    path = write_config({"baseline": {"target": "1999"}, "severity": {"default": "warning"}})
    with pytest.raises(ConfigError):
        check_compatibility([SourceDocument("a.js", "a ?? b;\n")], config_path=path)


def test_config_discovered_from_workspace_root(tmp_path, write_config):
    write_config({
        "baseline": {"target": "2024"},
        "severity": {"default": "info"},
    })
    diagnostics = check_compatibility(
        [SourceDocument("a.js", "a ?? b;\n")], workspace_root=tmp_path
    )
    assert [d.severity for d in diagnostics] == [Severity.INFO]


def test_effective_config_default_is_usable():
    assert BaselineChecker(EffectiveConfig()).check_units([]) == []


def test_occurrence_severity_used_without_config_override():
    occurrence = Occurrence(
        feature="nullish-coalescing", file="a.js", line=1, column=12,
        message="Nullish coalescing (??) requires modern browsers",
        severity=Severity.INFO,
    )
    (diagnostic,) = BaselineChecker().apply([occurrence])
    assert diagnostic.severity is Severity.INFO
    (overridden,) = BaselineChecker(_config()).apply([occurrence])
    assert overridden.severity is Severity.WARNING
