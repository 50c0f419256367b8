# render_profiler/exporters/json_exporter.py - JSON format exporter
"""
Exports analysis results and converted profiles as JSON files.
"""

import json
from pathlib import Path
from datetime import datetime
from typing import Dict, Optional
import logging

from render_profiler.analyzer.profile_analyzer import AnalysisBundle


class JSONExporter:
    """
    Exports results to JSON files for further processing or visualization.
    """

    def __init__(self, output_dir: Optional[str] = None):
        """
        Initialize the JSON exporter.

        Args:
            output_dir: Directory to save JSON files (default: current directory)
        """
        self.output_dir = Path(output_dir) if output_dir else Path('.')
        self.logger = logging.getLogger(__name__)

        self.output_dir.mkdir(parents=True, exist_ok=True)

    def _resolve_path(self, filename: Optional[str], prefix: str) -> Path:
        if not filename:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            filename = f'{prefix}_{timestamp}.json'
        return self.output_dir / filename

    def export_analysis(self, bundle: AnalysisBundle, filename: Optional[str] = None) -> str:
        """
        Export analysis results to a JSON file.

        Args:
            bundle: Analysis results
            filename: Output filename (auto-generated if not provided)

        Returns:
            Path to output file
        """
        output_path = self._resolve_path(filename, 'analysis')

        with open(output_path, 'w') as f:
            json.dump({
                'timestamp': datetime.now().isoformat(),
                'analysis': bundle.to_dict(),
            }, f, indent=2)

        self.logger.info(f"Exported analysis of {bundle.commits.total_commits} commits to {output_path}")
        return str(output_path)

    def export_profile(self, profile: Dict, filename: Optional[str] = None) -> str:
        """
        Export a canonical profile to a JSON file.

        Args:
            profile: Profile in ``dataForRoots`` form
            filename: Output filename (auto-generated if not provided)

        Returns:
            Path to output file
        """
        output_path = self._resolve_path(filename, 'profile')

        with open(output_path, 'w') as f:
            json.dump(profile, f, indent=2)

        roots = profile.get('dataForRoots') or []
        commit_count = sum(len(root.get('commitData') or []) for root in roots if isinstance(root, dict))
        self.logger.info(f"Exported profile with {commit_count} commits to {output_path}")
        return str(output_path)
