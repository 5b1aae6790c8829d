"""Unit tests for the snapshot differ."""

import pytest
from loki.core.errors import InsufficientHistory
from loki.operations.diff import (
    ADDED, REMOVED, UNCHANGED, DiffEngine, FileDiff, LineSegment, diff_lines,
)


class TestDiffLines:
    """Tests for the line diff."""
    
    def test_changed_middle_line(self):
        """Test a replaced line between unchanged lines."""
        segments = diff_lines('a\nb\nc\n', 'a\nx\nc\n')
        assert segments == [
            LineSegment(UNCHANGED, 'a\n'),
            LineSegment(REMOVED, 'b\n'),
            LineSegment(ADDED, 'x\n'),
            LineSegment(UNCHANGED, 'c\n'),
        ]
    
    def test_identical(self):
        """Test identical texts yield one unchanged run."""
        assert diff_lines('a\nb\n', 'a\nb\n') == [LineSegment(UNCHANGED, 'a\nb\n')]
    
    def test_both_empty(self):
        """Test empty texts yield no segments."""
        assert diff_lines('', '') == []
    
    def test_appended_lines(self):
        """Test lines added at the end."""
        assert diff_lines('a\n', 'a\nb\nc\n') == [
            LineSegment(UNCHANGED, 'a\n'),
            LineSegment(ADDED, 'b\nc\n'),
        ]
    
    def test_removed_lines(self):
        """Test lines removed from the start."""
        assert diff_lines('a\nb\nc\n', 'c\n') == [
            LineSegment(REMOVED, 'a\nb\n'),
            LineSegment(UNCHANGED, 'c\n'),
        ]
    
    def test_without_trailing_newline(self):
        """Test single-line contents without newline."""
        assert diff_lines('hello', 'hello world') == [
            LineSegment(REMOVED, 'hello'),
            LineSegment(ADDED, 'hello world'),
        ]
    
    def test_trailing_newline_added(self):
        """Test a newline change counts as a line change."""
        assert diff_lines('hello', 'hello\n') == [
            LineSegment(REMOVED, 'hello'),
            LineSegment(ADDED, 'hello\n'),
        ]
    
    def test_segment_lines(self):
        """Test splitting a run back into lines."""
        assert LineSegment(ADDED, 'b\nc\n').lines() == ['b\n', 'c\n']


class TestFileDiff:
    """Tests for FileDiff."""
    
    def test_has_changes(self):
        """Test change detection."""
        assert FileDiff('a', [LineSegment(ADDED, 'x\n')]).has_changes
        assert not FileDiff('a', [LineSegment(UNCHANGED, 'x\n')]).has_changes
        assert not FileDiff('a', []).has_changes
    
    def test_new_file_has_changes(self):
        """Test new files always count as changed."""
        assert FileDiff('a', [], is_new=True).has_changes
    
    def test_added_and_removed_lines(self):
        """Test per-line accessors."""
        diff = FileDiff('a', diff_lines('a\nb\nc\n', 'a\nx\ny\nc\n'))
        assert diff.removed_lines == ['b\n']
        assert diff.added_lines == ['x\n', 'y\n']


def test_diff_head_modified_file(repo_with_commits):
    """Test README changed from hello to hello world."""
    diffs = repo_with_commits.diff.diff_head()
    
    assert len(diffs) == 1
    readme = diffs[0]
    assert readme.path == 'README'
    assert not readme.is_new
    assert readme.removed_lines == ['hello']
    assert readme.added_lines == ['hello world']


def test_diff_head_new_file(repo, write_file):
    """Test a file missing from the parent is reported as added."""
    write_file('README', 'hello\n')
    repo.add('README')
    repo.commit('first')
    
    write_file('NEW', 'one\ntwo\n')
    repo.add('NEW')
    repo.commit('second')
    
    diffs = repo.diff.diff_head()
    assert len(diffs) == 1
    assert diffs[0].is_new
    assert diffs[0].segments == [LineSegment(ADDED, 'one\ntwo\n')]
    assert diffs[0].removed_lines == []


def test_diff_head_nothing_staged(repo_with_commits):
    """Test two commits without changes between them."""
    repo = repo_with_commits
    repo.commit('third')
    
    diffs = repo.diff.diff_head()
    assert [d for d in diffs if d.has_changes] == []


def test_diff_head_same_content_readded(repo_with_commits):
    """Test re-staging unchanged content reports no changes."""
    repo = repo_with_commits
    repo.add('README')
    repo.commit('third')
    
    diffs = repo.diff.diff_head()
    assert len(diffs) == 1
    assert not diffs[0].has_changes


def test_diff_ignores_files_only_in_parent(repo, write_file):
    """Test files dropped from the newer commit are not reported."""
    write_file('a.txt', 'a\n')
    write_file('b.txt', 'b\n')
    repo.add('a.txt')
    repo.add('b.txt')
    repo.commit('first')
    
    write_file('a.txt', 'a2\n')
    repo.add('a.txt')
    repo.commit('second')
    
    diffs = repo.diff.diff_head()
    assert [d.path for d in diffs] == ['a.txt']


def test_diff_uses_first_parent_entry(repo, write_file):
    """Test duplicate paths in the parent resolve to the first entry."""
    write_file('a.txt', 'one\n')
    repo.add('a.txt')
    write_file('a.txt', 'two\n')
    repo.add('a.txt')
    repo.commit('first')
    
    write_file('a.txt', 'one\n')
    repo.add('a.txt')
    repo.commit('second')
    
    diffs = repo.diff.diff_head()
    assert not diffs[0].has_changes


def test_diff_reports_duplicate_current_entries(repo, write_file):
    """Test each entry of the newer commit gets its own result."""
    write_file('a.txt', 'one\n')
    repo.add('a.txt')
    repo.commit('first')
    
    write_file('a.txt', 'two\n')
    repo.add('a.txt')
    write_file('a.txt', 'three\n')
    repo.add('a.txt')
    repo.commit('second')
    
    diffs = repo.diff.diff_head()
    assert [d.added_lines for d in diffs] == [['two\n'], ['three\n']]


def test_diff_head_without_commits(repo):
    """Test diff needs at least two commits."""
    with pytest.raises(InsufficientHistory):
        repo.diff.diff_head()


def test_diff_head_single_commit(repo, write_file):
    """Test diff with only a root commit."""
    write_file('README', 'hello')
    repo.add('README')
    repo.commit('first')
    with pytest.raises(InsufficientHistory):
        repo.diff.diff_head()


def test_diff_commits_explicit(repo_with_commits):
    """Test diffing two named commits."""
    repo = repo_with_commits
    engine = DiffEngine(repo)
    diffs = engine.diff_commits(repo.first_commit, repo.second_commit)
    assert diffs[0].added_lines == ['hello world']


class TestFormatDiff:
    """Tests for the annotated report."""
    
    def test_format_changed_file(self, repo_with_commits):
        """Test +/- annotations without colors."""
        repo = repo_with_commits
        output = repo.diff.format_diff(repo.diff.diff_head(), color=False)
        lines = output.splitlines()
        
        assert 'Changes in file: README' in lines
        assert '- hello' in lines
        assert '+ hello world' in lines
    
    def test_format_suppresses_unchanged_lines(self, repo):
        """Test unchanged lines are not printed."""
        diffs = [FileDiff('a.txt', diff_lines('keep\nold\n', 'keep\nnew\n'))]
        output = repo.diff.format_diff(diffs, color=False)
        
        assert 'keep' not in output
        assert '- old' in output
        assert '+ new' in output
    
    def test_format_new_file(self, repo):
        """Test new files are marked as such."""
        diffs = [FileDiff('NEW', [LineSegment(ADDED, 'x\n')], is_new=True)]
        output = repo.diff.format_diff(diffs, color=False)
        assert 'new file in this commit' in output
        assert '+ NEW' in output
    
    def test_format_skips_unchanged_files(self, repo):
        """Test files without changes are left out."""
        diffs = [FileDiff('same.txt', [LineSegment(UNCHANGED, 'x\n')])]
        assert repo.diff.format_diff(diffs, color=False) == ''
    
    def test_format_with_color(self, repo):
        """Test colored output contains ANSI escapes."""
        diffs = [FileDiff('a.txt', diff_lines('old\n', 'new\n'))]
        assert '\x1b[' in repo.diff.format_diff(diffs, color=True)


def test_format_keeps_trailing_whitespace(repo):
    """Test whitespace-only changes stay visible in the report."""
    diffs = [FileDiff('a', diff_lines('a  \n', 'a\n'))]
    lines = repo.diff.format_diff(diffs, color=False).splitlines()
    assert '- a  ' in lines
    assert '+ a' in lines


def test_format_strips_crlf(repo):
    """Test Windows line endings are not echoed into the report."""
    diffs = [FileDiff('a', diff_lines('old\r\n', 'new\r\n'))]
    output = repo.diff.format_diff(diffs, color=False)
    assert '\r' not in output
    assert '+ new' in output.splitlines()
