"""List the clamda helpers along with their arities."""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional, Sequence

import clamda.core
import clamda.logging
from clamda.arity import count_arity
from clamda.curry import Curried


arg_parser = argparse.ArgumentParser(
    prog='python -m clamda',
    description='List the curried helpers clamda provides.',
)
arg_parser.add_argument(
    'names',
    nargs='*',
    metavar='name',
    help='only list these helpers',
)
arg_parser.add_argument(
    '--json',
    action='store_true',
    default=False,
    help='print the helpers as a JSON array',
)
arg_parser.add_argument(
    '--verbose',
    action='store_true',
    default=False,
    help='print internal logs',
)
arg_parser.add_argument(
    '--log-file',
    default=None,
    help='write JSON logs to this file',
)


def describe(name: str) -> Dict[str, object]:
    helper = getattr(clamda.core, name)
    if isinstance(helper, Curried):
        arity = helper.arity
        curried = True
    else:
        arity = count_arity(helper) if callable(helper) else 0
        curried = False
    doc = (getattr(helper, '__doc__', None) or '').strip()
    return {
        'name': name,
        'arity': arity,
        'curried': curried,
        'summary': doc.splitlines()[0] if doc else '',
    }


def catalogue(names: Sequence[str] = ()) -> List[Dict[str, object]]:
    public = [
        name
        for name in clamda.core.__all__
        if callable(getattr(clamda.core, name))
    ]
    unknown = [name for name in names if name not in public]
    if unknown:
        raise KeyError(', '.join(unknown))
    return [describe(name) for name in (names or public)]


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = arg_parser.parse_args(argv)
    if args.verbose or args.log_file:
        clamda.logging.configure(logging.DEBUG, path=args.log_file)
    try:
        entries = catalogue(args.names)
    except KeyError as e:
        print(f'Unknown helpers: {e.args[0]}', file=sys.stderr)
        return 2
    if args.json:
        json.dump(entries, sys.stdout, indent=2)
        print()
        return 0
    width = max(len(str(entry['name'])) for entry in entries)
    for entry in entries:
        print(f'{entry["name"]:<{width}}  {entry["arity"]}  {entry["summary"]}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
