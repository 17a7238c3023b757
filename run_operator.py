#!/usr/bin/env python3
"""
Run the postgres-database-operator with Kopf.

Applies the kubernetes_asyncio patch before Kopf is loaded, then hands over
to Kopf's CLI with the given arguments.

Usage:
    python run_operator.py [any kopf run arguments]

Examples:
    python run_operator.py --verbose --all-namespaces
    python run_operator.py -n databases --log-format=json
"""

# Must run before anything imports kopf
from pgdb.utils.override import patch_kopf_thirdparty
patch_kopf_thirdparty()

import sys  # noqa: E402

if __name__ == '__main__':
    import kopf.cli  # noqa: E402

    # Registers the startup hook and handlers
    import pgdb.app  # noqa: E402, F401

    # Behave as if invoked as: kopf run <args>
    sys.argv.insert(1, 'run')

    sys.exit(kopf.cli.main(prog_name="kopf"))
