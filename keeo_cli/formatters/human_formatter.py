"""Human-readable output formatter for Keeo CLI."""

import sys

MAX_COLUMN_WIDTH = 40
MAX_NESTED_ITEMS = 5


class HumanFormatter:
    """Outputs readable text for direct terminal use."""

    def output_result(self, result, metadata=None):
        if isinstance(result, list):
            self._format_list(result)
        elif isinstance(result, dict):
            self._format_dict(result)
        else:
            print(result)

    def output_error(self, error):
        message = getattr(error, 'message', None) or str(error)
        suggestion = getattr(error, 'suggestion', None)

        print(f"Error: {message}", file=sys.stderr)
        if suggestion:
            print(f"  Suggestion: {suggestion}", file=sys.stderr)

    def _format_list(self, items, indent=0):
        prefix = "  " * indent
        if not items:
            print(f"{prefix}(no results)")
            return

        if all(isinstance(item, dict) for item in items):
            # unit category trees nest through 'children'
            if any('children' in item for item in items):
                self._format_tree(items, indent)
            else:
                self._format_table(items)
        else:
            for item in items:
                print(f"{prefix}  - {item}")

    def _format_dict(self, data, indent=0):
        prefix = "  " * indent
        for key, value in data.items():
            if isinstance(value, dict):
                print(f"{prefix}{key}:")
                self._format_dict(value, indent + 1)
            elif isinstance(value, list) and value and isinstance(value[0], dict):
                print(f"{prefix}{key}: ({len(value)} items)")
                for item in value[:MAX_NESTED_ITEMS]:
                    self._format_dict(item, indent + 1)
                    print(f"{prefix}  ---")
                if len(value) > MAX_NESTED_ITEMS:
                    print(f"{prefix}  ... and {len(value) - MAX_NESTED_ITEMS} more")
            elif isinstance(value, list):
                print(f"{prefix}{key}: {', '.join(str(v) for v in value) or '(none)'}")
            else:
                print(f"{prefix}{key}: {value}")

    def _format_tree(self, nodes, indent=0):
        prefix = "  " * indent
        for node in nodes:
            print(f"{prefix}- {node.get('name')} [{node.get('id')}]")
            self._format_tree(node.get('children') or [], indent + 1)

    def _format_table(self, items):
        """Format list of dicts as a simple table."""
        keys = []
        for item in items:
            for key, value in item.items():
                if key not in keys and not isinstance(value, (dict, list)):
                    keys.append(key)

        widths = {}
        for key in keys:
            values = [str(item.get(key, ''))[:MAX_COLUMN_WIDTH] for item in items]
            widths[key] = max(len(key), max(len(v) for v in values))

        header = "  ".join(key.ljust(widths[key]) for key in keys)
        print(header)
        print("-" * len(header))

        for item in items:
            row = "  ".join(
                str(item.get(key, ''))[:MAX_COLUMN_WIDTH].ljust(widths[key]) for key in keys
            )
            print(row)

        print(f"\n({len(items)} total)")
