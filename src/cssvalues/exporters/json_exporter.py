"""JSON exporter for resolved values."""

from pathlib import Path
import json
from typing import Dict, List, Optional

from cssvalues.processor import ProcessResult


class JSONExporter:
    """Export the values resolved for each stylesheet to JSON format."""

    def build(self, results: Dict[str, ProcessResult]) -> Dict:
        """Build the exported document for ``results`` keyed by file."""
        files = {}
        for path, result in results.items():
            values_messages = result.get_messages("values")
            files[path] = {
                "values": values_messages[-1]["values"] if values_messages else {},
                "dependencies": sorted({
                    message["file"] for message in result.get_messages("dependency")
                }),
                "warnings": [str(warning) for warning in result.warnings],
            }

        return {
            "metadata": {
                "total_files": len(files),
                "total_values": sum(len(entry["values"]) for entry in files.values()),
                "total_warnings": sum(len(entry["warnings"]) for entry in files.values()),
            },
            "files": files,
        }

    def export(
        self,
        results: Dict[str, ProcessResult],
        output_path: Path,
        errors: Optional[List[str]] = None
    ) -> None:
        """Export values to JSON file."""
        data = self.build(results)
        if errors:
            data["errors"] = errors

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(data, f, indent=2, default=str)
