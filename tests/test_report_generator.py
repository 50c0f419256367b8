# tests/test_report_generator.py - Tests for report generation
"""
Unit tests for the ReportGenerator and the console exporter.
"""

import json

from render_profiler.analyzer.commit_classifier import ComponentStats
from render_profiler.analyzer.profile_analyzer import analyze_profile
from render_profiler.analyzer.report_generator import ReportGenerator
from render_profiler.exporters.json_exporter import JSONExporter
from render_profiler.exporters.stdout import StdoutExporter


def _bundle():
    commits = [
        {'duration': 150, 'updaters': [{'displayName': 'HomeScreen'}], 'fiberActualDurations': [[1, 120]]},
        {'duration': 60, 'updaters': [{'displayName': 'HeroImage'}], 'fiberActualDurations': [[2, 60]]},
        {'duration': 8, 'updaters': [{'displayName': 'Button'}], 'fiberActualDurations': [[3, 8]]},
    ]
    snapshots = [
        [1, {'displayName': 'HomeScreen'}],
        [2, {'displayName': 'HeroImage'}],
        [3, {'displayName': 'Button'}],
    ]
    return analyze_profile({'dataForRoots': [{'commitData': commits, 'snapshots': snapshots}]})


class TestReportGenerator:
    """Test cases for ReportGenerator"""

    def setup_method(self):
        """Setup test fixtures"""
        self.generator = ReportGenerator()

    def test_json_report(self):
        """Test the JSON report wraps the analysis"""
        report = json.loads(self.generator.generate_json_report(_bundle()))

        assert 'timestamp' in report
        assert report['analysis']['commits']['total_commits'] == 3
        assert report['analysis']['insights']['imageOptimizationIssues'] == 1

    def test_markdown_report(self):
        """Test the Markdown report sections"""
        report = self.generator.generate_markdown_report(_bundle())

        assert report.startswith('# Render Performance Report')
        assert '## Summary' in report
        assert '- **Total Commits:** 3' in report
        assert '- **Critical (>=100ms):** 1' in report
        assert '- **Very slow (>=50ms):** 1' in report
        assert '## Critical Issues' in report
        assert '| warning | image-resize | HeroImage |' in report
        assert '## Top Components by Total Render Time' in report
        assert '## Slowest Renders' in report
        assert '1. HomeScreen: 120.00ms (Critical (>=100ms))' in report
        assert '## Pages' in report
        assert '## Recommendations' in report

    def test_markdown_report_limits(self):
        """Test the configured list sizes are honored"""
        report = ReportGenerator(top_components=1, slowest_renders=1, top_pages=1).generate_markdown_report(_bundle())

        assert '| HomeScreen | 1 | 150.00 | 150.00 |' in report
        assert '| Button |' not in report
        assert '2. HeroImage' not in report

    def test_markdown_report_empty_trace(self):
        """Test an empty trace only gets the summary"""
        report = self.generator.generate_markdown_report(analyze_profile({}))

        assert '## Summary' in report
        assert '## Critical Issues' not in report
        assert '## Pages' not in report
        assert '## Recommendations' not in report

    def test_converted_trace_noted(self):
        """Test reports mention converted event traces"""
        bundle = analyze_profile({'traceEvents': [
            {'name': 'Row', 'ph': 'b', 'ts': 0},
            {'name': 'Row', 'ph': 'e', 'ts': 20000},
        ]})

        assert 'Converted from a begin/end event trace' in self.generator.generate_markdown_report(bundle)

    def test_csv_components(self):
        """Test CSV rows sorted by total duration"""
        stats = {'A': ComponentStats(2, 30, 20), 'B': ComponentStats(1, 50, 50)}

        csv_report = self.generator.generate_csv_components(stats)

        assert csv_report == (
            'component,count,total_duration_ms,avg_duration_ms,max_duration_ms\n'
            'B,1,50.00,50.00,50.00\n'
            'A,2,30.00,15.00,20.00\n'
        )

    def test_csv_quotes_names(self):
        """Test component names with commas are quoted"""
        csv_report = self.generator.generate_csv_components({'Memo(A, B)': ComponentStats(1, 5, 5)})

        assert '"Memo(A, B)",1,5.00,5.00,5.00' in csv_report


class TestStdoutExporter:
    """Test cases for StdoutExporter"""

    def test_print_analysis_without_colors(self, capsys):
        """Test the console report has every section and no escape codes"""
        StdoutExporter(use_colors=False).print_analysis(_bundle())

        out = capsys.readouterr().out
        assert 'Total Commits: 3' in out
        assert 'Top Components by Total Render Time' in out
        assert 'Slowest Renders' in out
        assert 'Pages' in out
        assert 'Recommendations' in out
        assert '\x1b[' not in out

    def test_slowest_renders_overflow(self, capsys):
        """Test the remaining slow renders are summarized"""
        bundle = _bundle()

        StdoutExporter(use_colors=False, slowest_renders=1).print_slowest_renders(bundle.slow_fibers)

        out = capsys.readouterr().out
        assert 'HomeScreen' in out
        assert '... and 1 more slow renders' in out

    def test_empty_sections_skipped(self, capsys):
        """Test empty sections print nothing"""
        exporter = StdoutExporter(use_colors=False)

        exporter.print_top_components({})
        exporter.print_slowest_renders(())
        exporter.print_pages(())
        exporter.print_recommendations(())

        assert capsys.readouterr().out == ''


class TestJSONExporter:
    """Test cases for JSONExporter"""

    def test_export_analysis(self, tmp_path):
        """Test analysis is written to the named file"""
        exporter = JSONExporter(str(tmp_path / 'out'))

        path = exporter.export_analysis(_bundle(), 'analysis.json')

        assert path == str(tmp_path / 'out' / 'analysis.json')
        with open(path) as f:
            data = json.load(f)
        assert data['analysis']['commits']['total_commits'] == 3

    def test_export_analysis_auto_filename(self, tmp_path):
        """Test a timestamped filename is generated"""
        path = JSONExporter(str(tmp_path)).export_analysis(analyze_profile({}))

        assert path.startswith(str(tmp_path / 'analysis_'))
        assert path.endswith('.json')

    def test_export_profile(self, tmp_path):
        """Test a profile is written unchanged"""
        profile = {'dataForRoots': [{'commitData': [{'duration': 5}], 'snapshots': []}]}

        path = JSONExporter(str(tmp_path)).export_profile(profile, 'profile.json')

        with open(path) as f:
            assert json.load(f) == profile
