"""JSON output formatter for Keeo CLI."""

import json
import sys
from datetime import date, datetime, timezone


def _to_jsonable(value):
    """json.dumps fallback for entities and dates."""
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


class JsonFormatter:
    """Outputs structured JSON for scripts and agents.

    Results go to stdout wrapped in {'result', 'metadata'}; errors go to
    stderr as the error's to_dict() plus a timestamp.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def _dump(self, data, stream):
        print(json.dumps(data, indent=self.indent, default=_to_jsonable), file=stream)

    def output_result(self, result, metadata=None):
        self._dump({
            'result': result,
            'metadata': {
                'timestamp': datetime.now(timezone.utc).isoformat(),
                **(metadata or {})
            }
        }, sys.stdout)

    def output_error(self, error):
        if hasattr(error, 'to_dict'):
            error_dict = error.to_dict()
        else:
            error_dict = {
                'error': type(error).__name__,
                'message': str(error)
            }
        error_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        self._dump(error_dict, sys.stderr)
