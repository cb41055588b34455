"""Script rules over tree-sitter parse trees."""

from baseline_buddy.issue import Severity
from baseline_buddy.matchers.script_matcher import ScriptMatcher
from baseline_buddy.parsers import parse_script

from helpers import features, match_script


def test_optional_chain_and_nullish_positions():
    occurrences = match_script("const x = a?.b ?? c;")
    assert sorted((o.column, o.line, o.feature) for o in occurrences) == [
        (11, 1, "optional-chaining"),
        (15, 1, "nullish-coalescing"),
    ]


def test_one_occurrence_per_optional_chain():
    assert features(match_script("const v = a?.b?.c?.d;")) == ["optional-chaining"]
    assert features(match_script("api?.getData?.().then(done);")) == ["optional-chaining"]
    assert features(match_script("a?.b.c.d();")) == ["optional-chaining"]


def test_separate_chains_are_separate_occurrences():
    occurrences = match_script("foo(a?.b, c?.[0]);")
    assert features(occurrences) == ["optional-chaining", "optional-chaining"]


def test_optional_chain_reported_at_first_token():
    (occurrence,) = match_script("value = obj.list?.items?.length;")
    assert occurrence.column == len("value = obj.list")


def test_logical_or_is_not_nullish():
    assert match_script("const v = a || b && c;") == []


def test_private_members_each_get_an_occurrence():
    occurrences = match_script(
        """
        class Counter {
          #count = 0;
          #inc() {
            this.#count++;
          }
        }
        """
    )
    assert [(o.feature, o.line, o.message) for o in occurrences] == [
        ("private-class-fields", 3, "Private class fields require modern browsers"),
        ("private-class-fields", 4, "Private class methods require modern browsers"),
        ("private-class-fields", 5, "Private class field access requires modern browsers"),
    ]


def test_top_level_await_only_outside_functions():
    occurrences = match_script(
        """
        const data = await load();
        async function inner() {
          await load();
        }
        const arrow = async () => { await load(); };
        """
    )
    assert [(o.feature, o.line) for o in occurrences] == [("top-level-await", 2)]


def test_dynamic_import():
    assert features(match_script("const mod = import('./mod.js');")) == ["dynamic-import"]


def test_method_table_lookup():
    occurrences = match_script("const flat = nested.flat();\nconst last = [1, 2].at(-1);")
    assert features(occurrences) == ["array-flat", "array-at"]
    assert occurrences[0].message == "nested.flat() is not widely supported (newly)"


def test_qualified_name_table_lookup():
    occurrences = match_script("const o = Object.fromEntries(pairs);")
    assert features(occurrences) == ["object-fromentries"]
    assert occurrences[0].engines == ("chrome", "firefox", "safari")


def test_widely_supported_table_hits_are_not_emitted():
    assert match_script("fetch('/api').then(r => r.json());") == []


def test_member_access_without_call():
    assert features(match_script("const pick = window.showOpenFilePicker;")) == ["file-system-access"]


def test_constructor_lookup():
    occurrences = match_script("const ro = new ResizeObserver(cb);\nconst bc = new window.BroadcastChannel('x');")
    assert features(occurrences) == ["resize-observer", "broadcast-channel"]
    assert occurrences[0].message == "new ResizeObserver is not widely supported (newly)"


def test_intersection_observer_v2_by_options():
    v1 = match_script("new IntersectionObserver(cb, { threshold: 0.5 });")
    v2 = match_script("new IntersectionObserver(cb, { trackVisibility: true, delay: 100 });")
    assert features(v1) == ["intersection-observer"]
    assert features(v2) == ["intersection-observer-v2"]


def test_fixed_patterns_take_priority():
    occurrences = match_script(
        """
        navigator.clipboard.writeText(text);
        navigator.share({ url });
        document.startViewTransition(update);
        dialog.showModal();
        el.attributeStyleMap.set('opacity', 0.5);
        """
    )
    assert features(occurrences) == [
        "clipboard-api",
        "web-share",
        "view-transitions",
        "dialog-element",
        "css-typed-om",
    ]
    assert occurrences[0].message == (
        "navigator.clipboard.writeText() - Clipboard API requires modern browsers and user permission"
    )


def test_global_identifier():
    assert features(match_script("const root = globalThis;")) == ["globalthis"]


def test_suppression_own_line_and_inline():
    occurrences = match_script(
        """
        // baseline-buddy-ignore
        const a = x?.y;
        const b = p ?? q;
        const c = m?.n; // baseline-buddy-ignore
        const d = r?.s;
        """
    )
    assert [(o.feature, o.line) for o in occurrences] == [
        ("nullish-coalescing", 4),
        ("optional-chaining", 6),
    ]


def test_syntax_error_yields_nothing():
    assert match_script("const = ;") == []


def test_empty_and_comment_only():
    assert match_script("") == []
    assert match_script("// just a comment\n/* and another */\n") == []


def test_typescript_dialect():
    occurrences = match_script("const n: number = cfg?.retries ?? 3;", filename="input.ts")
    assert sorted(features(occurrences)) == ["nullish-coalescing", "optional-chaining"]


def test_failed_parse_input_matches_nothing():
    assert ScriptMatcher().match(None, "anything") == []


def test_matcher_instance_is_reusable():
    matcher = ScriptMatcher()
    first = matcher.match(parse_script("a?.b;", "a.js"), "a?.b;")
    second = matcher.match(parse_script("c ?? d;", "b.js"), "c ?? d;")
    assert features(first) == ["optional-chaining"]
    assert features(second) == ["nullish-coalescing"]
    assert second[0].file == "b.js"


def test_occurrence_severity_follows_catalog_status():
    source = "navigator.share({ url });\nconst v = a ?? b;\n"
    severities = {o.feature: o.severity for o in match_script(source)}
    assert severities == {"web-share": Severity.ERROR, "nullish-coalescing": Severity.WARNING}
