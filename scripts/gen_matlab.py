#!/usr/bin/env python3
"""
gen_matlab.py - MATLAB wrapper generator entry point

Generates MATLAB dispatch scripts and the MEX wrapper source for the global
functions described in a JSON IR file.

Usage:
    python scripts/gen_matlab.py IR_JSON [--toolbox PATH] [--wrapper-name NAME] [--verbose]
"""

import argparse
import os
import sys

# Get paths
script_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.abspath(os.path.join(script_dir, '..'))

# Add scripts directory to path
sys.path.insert(0, script_dir)

from wrap_gen import Generator, IR, WrapError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Generate MATLAB wrappers for global functions')
    parser.add_argument('ir', help='Path to JSON IR with function and class declarations')
    parser.add_argument('--toolbox', default=os.path.join(root_dir, 'gen/toolbox'),
                        help='Output toolbox directory')
    parser.add_argument('--wrapper-name', default='wrapper',
                        help='Name of the MEX gateway (and of its .cpp file)')
    parser.add_argument('--ignore', action='append', default=[],
                        help='C++ qualified function name to skip (repeatable)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Trace every generated file')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    gen = Generator(
        toolbox_path=args.toolbox,
        wrapper_name=args.wrapper_name,
        verbose=args.verbose,
    )
    gen.ignore(*args.ignore)

    try:
        gen.add_ir(IR.load(args.ir))
        registry = gen.generate()
    except (OSError, KeyError, ValueError, WrapError) as e:
        print(f'  >> error: {e}', file=sys.stderr)
        return 1

    print(f'\nGenerated {len(registry)} wrapper functions')
    return 0


if __name__ == '__main__':
    sys.exit(main())
