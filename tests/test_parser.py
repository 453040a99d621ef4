"""Tests for status report parsing."""

from vcsoverlay.kinds import StatusCode
from vcsoverlay.parser import PathEntry, extract_path, parse_change_report, parse_file_report
from vcsoverlay.profiles import GIT_PROFILE, HG_PROFILE, SVN_PROFILE


def _as_dict(entries):
    return {entry.path: entry.status for entry in entries}


def test_modified_line_parses_to_entry():
    entries = parse_file_report("M  Assets/Foo.cs", "Assets", SVN_PROFILE)
    assert entries == [PathEntry("Assets/Foo.cs", StatusCode.MODIFIED)]


def test_copy_with_history_resolves_destination():
    entries = parse_file_report("A  + Assets/New.cs\n", "Assets", SVN_PROFILE)
    assert entries == [PathEntry("Assets/New.cs", StatusCode.ADDED)]


def test_rename_arrow_keeps_destination():
    entries = parse_file_report("R  Assets/Old.cs -> Assets/New.cs\n", "Assets", GIT_PROFILE)
    assert [entry.path for entry in entries] == ["Assets/New.cs"]


def test_windows_separators_and_line_endings():
    report = "M       Assets\\Sub\\Foo.cs\r\n?       Assets\\Sub\\Bar.cs\r\n"
    statuses = _as_dict(parse_file_report(report, "Assets", SVN_PROFILE))
    assert statuses == {
        "Assets/Sub/Foo.cs": StatusCode.MODIFIED,
        "Assets/Sub/Bar.cs": StatusCode.UNMANAGED,
    }


def test_lines_outside_the_root_are_skipped():
    report = "\n".join(
        [
            "Status against revision:     42",
            "?       ProjectSettings/EditorSettings.asset",
            "?       MyAssets/Other.cs",
            "svn: warning: W155010: something",
            "M       Assets/Kept.cs",
        ]
    )
    assert _as_dict(parse_file_report(report, "Assets", SVN_PROFILE)) == {
        "Assets/Kept.cs": StatusCode.MODIFIED,
    }


def test_paths_without_extension_are_directories():
    entries = parse_file_report("?       Assets/NewFolder\n", "Assets", SVN_PROFILE)
    assert entries == [PathEntry("Assets/NewFolder", StatusCode.UNMANAGED, is_dir=True)]


def test_git_untracked_directory_trailing_slash():
    entries = parse_file_report("?? Assets/NewFolder/\n", "Assets", GIT_PROFILE)
    assert entries == [PathEntry("Assets/NewFolder", StatusCode.UNMANAGED, is_dir=True)]


def test_git_quoted_path():
    entries = parse_file_report('?? "Assets/with space.txt"\n', "Assets", GIT_PROFILE)
    assert entries == [PathEntry("Assets/with space.txt", StatusCode.UNMANAGED)]


def test_svn_verbose_listing():
    report = "\n".join(
        [
            "                 7        7 alice        Assets",
            "                 7        5 alice        Assets/Foo.cs",
            "M                7        5 alice        Assets/Bar.cs",
        ]
    )
    entries = parse_file_report(report, "Assets", SVN_PROFILE)
    assert entries == [
        PathEntry("Assets", StatusCode.NORMAL, is_dir=True),
        PathEntry("Assets/Foo.cs", StatusCode.NORMAL),
        PathEntry("Assets/Bar.cs", StatusCode.MODIFIED),
    ]


def test_meta_change_promotes_unchanged_asset():
    report = "\n".join(
        [
            "                 7        5 alice        Assets/Foo.cs",
            "M                7        5 alice        Assets/Foo.cs.meta",
        ]
    )
    statuses = _as_dict(parse_file_report(report, "Assets", SVN_PROFILE))
    assert statuses["Assets/Foo.cs"] is StatusCode.MODIFIED
    assert statuses["Assets/Foo.cs.meta"] is StatusCode.MODIFIED


def test_meta_promotion_does_not_depend_on_line_order():
    report = "M  Assets/Foo.cs.meta\n   7  5 alice  Assets/Foo.cs\n"
    statuses = _as_dict(parse_file_report(report, "Assets", SVN_PROFILE))
    assert statuses["Assets/Foo.cs"] is StatusCode.MODIFIED


def test_meta_change_promotes_unlisted_asset():
    """Git only lists changed files, so the asset itself may be absent."""
    statuses = _as_dict(parse_file_report(" M Assets/Foo.cs.meta\n", "Assets", GIT_PROFILE))
    assert statuses["Assets/Foo.cs"] is StatusCode.MODIFIED


def test_meta_change_does_not_override_changed_asset():
    report = "A       Assets/Foo.cs\nM       Assets/Foo.cs.meta\n"
    statuses = _as_dict(parse_file_report(report, "Assets", SVN_PROFILE))
    assert statuses["Assets/Foo.cs"] is StatusCode.ADDED


def test_unchanged_meta_does_not_promote():
    statuses = _as_dict(parse_file_report("C Assets/Foo.cs.meta\n", "Assets", HG_PROFILE))
    assert statuses == {"Assets/Foo.cs.meta": StatusCode.NORMAL}


def test_folder_meta_is_not_promoted_to_a_file():
    statuses = _as_dict(parse_file_report("M       Assets/Folder.meta\n", "Assets", SVN_PROFILE))
    assert statuses == {"Assets/Folder.meta": StatusCode.MODIFIED}


def test_change_report_never_promotes():
    entries = parse_change_report("M       Assets/Foo.cs.meta\n", "Assets", SVN_PROFILE)
    assert entries == [PathEntry("Assets/Foo.cs.meta", StatusCode.MODIFIED)]


def test_change_report_keeps_duplicates_in_order():
    report = "C       Assets/A/x.cs\nM       Assets/A/y.cs\n"
    entries = parse_change_report(report, "Assets", SVN_PROFILE)
    assert [entry.status for entry in entries] == [StatusCode.CONFLICTED, StatusCode.MODIFIED]


def test_extract_path_requires_segment_boundary():
    assert extract_path("?  MyAssets/foo.txt", "Assets") is None
    assert extract_path("?  AssetsBackup/foo.txt", "Assets") is None
    assert extract_path("?  ./Assets/foo.txt", "Assets") == "Assets/foo.txt"
    assert extract_path("?  Assets", "Assets") == "Assets"


def test_empty_report():
    assert parse_file_report("", "Assets", SVN_PROFILE) == []
    assert parse_change_report("\n\n", "Assets", SVN_PROFILE) == []
