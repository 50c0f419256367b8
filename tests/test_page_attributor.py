# tests/test_page_attributor.py - Tests for per-screen breakdown
"""
Unit tests for page attribution and aggregation.
"""

import pytest
from render_profiler.analyzer.page_attributor import (
    OTHER_COMPONENTS_PAGE,
    PageAttributor,
    analyze_by_page,
    attribute_page,
    extract_page_name,
    is_page_component,
)
from render_profiler.collector.profile import parse_profile


def _profile(*commits):
    return parse_profile({'dataForRoots': [{'commitData': [
        {'duration': duration, 'updaters': [{'displayName': name} for name in names]}
        for duration, names in commits
    ]}]})


class TestPageNames:
    """Test cases for page name derivation"""

    @pytest.mark.parametrize('component,page', [
        ('HomeScreen', 'Home'),
        ('SettingsPage', 'Settings'),
        ('Memo(SettingsPage)', 'Settings'),
        ('Lazy(ProfileScreen)', 'Profile'),
        ('App.CheckoutScreen', 'Checkout'),
        ('Stack.Screen', 'Stack.Screen'),
        ('RootNavigator', 'RootNavigator'),
        ('AdminDashboard', 'AdminDashboard'),
        ('UserProfileCard', 'Profile'),
        ('ProductListItem', 'List'),
        ('SearchBar', 'Search'),
        ('Button', OTHER_COMPONENTS_PAGE),
    ])
    def test_attribute_page(self, component, page):
        """Test components are assigned to the expected page"""
        assert attribute_page(component) == page

    def test_page_patterns_case_insensitive(self):
        """Test screen detection ignores case"""
        assert is_page_component('homescreen')
        assert is_page_component('mainNAVIGATION')
        assert not is_page_component('Button')

    def test_suffix_strip_is_case_sensitive(self):
        """Test only exact Screen/Page suffixes are stripped"""
        assert extract_page_name('homescreen') == 'homescreen'
        assert extract_page_name('HomeScreen') == 'Home'

    def test_empty_name_falls_back_to_original(self):
        """Test names that strip to nothing are kept whole"""
        assert extract_page_name('Screen') == 'Screen'
        assert extract_page_name('Memo(Page)') == 'Memo(Page)'


class TestPageAttributor:
    """Test cases for PageAttributor"""

    def test_aggregation(self):
        """Test renders are aggregated per page"""
        trace = _profile(
            (120, ['HomeScreen']),
            (60, ['HomeHeader']),
            (10, ['HomeScreen']),
            (30, ['Button']),
        )

        results = PageAttributor().analyze(trace)

        assert results.total_pages == 2
        home, other = results.pages
        assert home.page_name == 'Home'
        assert home.total_duration == 190
        assert home.render_count == 3
        assert home.avg_duration == pytest.approx(190 / 3)
        assert home.max_duration == 120
        assert home.critical_renders == 1
        assert home.slow_renders == 1
        assert home.components == ('HomeScreen', 'HomeHeader')
        assert other.page_name == OTHER_COMPONENTS_PAGE
        assert results.slowest_page == home

    def test_slow_counter_uses_very_slow_threshold(self):
        """Test renders between 16ms and 50ms are not counted as slow"""
        results = analyze_by_page(_profile((30, ['Button']), (49.9, ['Button']), (50, ['Button'])))

        page = results.pages[0]
        assert page.slow_renders == 1
        assert page.critical_renders == 0

    def test_slow_and_critical_disjoint(self):
        """Test a critical render is not also counted as slow"""
        results = analyze_by_page(_profile((100, ['CartScreen']), (250, ['CartScreen'])))

        page = results.pages[0]
        assert page.critical_renders == 2
        assert page.slow_renders == 0

    def test_every_updater_credited(self):
        """Test a render with several updaters counts for each page"""
        results = analyze_by_page(_profile((40, ['HomeScreen', 'SettingsScreen'])))

        assert {p.page_name: p.total_duration for p in results.pages} == {'Home': 40, 'Settings': 40}

    def test_pages_sorted_by_total_duration(self):
        """Test the slowest page comes first"""
        results = analyze_by_page(_profile(
            (10, ['LoginScreen']),
            (80, ['CartScreen']),
            (20, ['LoginScreen']),
        ))

        assert [p.page_name for p in results.pages] == ['Cart', 'Login']
        assert results.slowest_page.page_name == 'Cart'

    def test_empty_trace(self):
        """Test an empty trace yields no pages"""
        results = analyze_by_page(parse_profile({}))

        assert results.pages == ()
        assert results.total_pages == 0
        assert results.slowest_page is None
        assert results.to_dict() == {'pages': [], 'totalPages': 0, 'slowestPage': None}

    def test_to_dict(self):
        """Test page metrics serialize with camelCase keys"""
        page = analyze_by_page(_profile((20, ['HomeScreen']))).pages[0]

        assert page.to_dict() == {
            'pageName': 'Home',
            'totalDuration': 20,
            'renderCount': 1,
            'avgDuration': 20,
            'maxDuration': 20,
            'criticalRenders': 0,
            'slowRenders': 0,
            'components': ['HomeScreen'],
        }
