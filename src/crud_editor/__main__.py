# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""CLI entry point for crud-editor.

Usage:
    crud-editor --help
    crud-editor statements students.json --dialect postgresql
    crud-editor read students.json --db ./school.db --filter school_id=1
"""

from .cli import main

if __name__ == "__main__":
    main()
