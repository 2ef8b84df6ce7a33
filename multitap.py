#!/usr/bin/env python3
"""
Old Phone Pad Multi-Tap Decoder

Decode key presses typed on an old phone keypad into text.

Keys:
    2-9 : letter keys, repeated presses cycle through the key's letters
    ' ' : pause, commits the current run of presses
    '*' : backspace, commits the run then deletes the last letter
    '#' : send, commits the run and ends the input

Examples:
    # Decode a sequence
    python3 multitap.py decode "4433555 555666#"
    # Output: HELLO

    # Backspace removes the last letter
    python3 multitap.py decode "227*#"
    # Output: B

    # Decode from a file (use - for stdin)
    python3 multitap.py decode -i presses.txt -o decoded.txt
"""

import sys
import argparse
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Optional


logger = logging.getLogger(__name__)


# Keypad Mapping

# '0' and '1' carry no letters
KEYPAD = MappingProxyType({
    '2': 'ABC',
    '3': 'DEF',
    '4': 'GHI',
    '5': 'JKL',
    '6': 'MNO',
    '7': 'PQRS',
    '8': 'TUV',
    '9': 'WXYZ',
})

SEND = '#'
BACKSPACE = '*'
PAUSE = ' '
DIGITS = '0123456789'


# Decoding

def decode_group(group: str) -> str:
    """Decode a run of identical presses (e.g., '444' -> 'I').

    Presses past the last letter wrap around to the first one, so '2222'
    decodes to 'A'. Keys without letters decode to an empty string.
    """
    if not group:
        return ''

    key = group[0]
    if not all(c == key for c in group):
        raise ValueError(f"Invalid group (mixed digits): '{group}'")

    letters = KEYPAD.get(key)
    if letters is None:
        return ''

    return letters[(len(group) - 1) % len(letters)]


def decode(sequence: Optional[str]) -> str:
    """
    Decode an old phone pad key sequence to text.

    A run of presses is committed by a pause, a different digit,
    backspace or send. Input after '#' is never read, and a run still
    pending when the input ends without '#' is dropped. Characters
    other than digits, ' ', '*' and '#' are ignored.
    """
    if not sequence:
        return ''

    output = []
    group = ''

    for char in sequence:
        if char == SEND:
            output.extend(decode_group(group))
            break

        if char == BACKSPACE:
            output.extend(decode_group(group))
            group = ''
            if output:
                output.pop()
        elif char == PAUSE:
            output.extend(decode_group(group))
            group = ''
        elif char in DIGITS:
            if group and group[0] != char:
                output.extend(decode_group(group))
                group = char
            else:
                group += char

    result = ''.join(output)
    logger.debug("Input: %s, output: %s", sequence, result)
    return result


# File I/O

def read_input(path: str) -> str:
    """Read a key sequence from file or stdin, dropping the line ending."""
    if path == '-':
        return sys.stdin.read().rstrip('\r\n')

    try:
        return Path(path).read_text(encoding='utf-8').rstrip('\r\n')
    except FileNotFoundError:
        print(f"Error: File not found: {path}", file=sys.stderr)
        sys.exit(1)
    except UnicodeDecodeError:
        print(f"Error: Invalid UTF-8 encoding: {path}", file=sys.stderr)
        sys.exit(1)


def write_output(content: str, path: Optional[str]) -> None:
    """Write output to file or stdout."""
    if path:
        try:
            Path(path).write_text(content + '\n', encoding='utf-8')
            print(f"Saved: {path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing file: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(content)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Old phone pad multi-tap decoder',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    subparsers = parser.add_subparsers(dest='command', required=True,
                                       help='Operation mode')

    decode_parser = subparsers.add_parser('decode',
                                          help='Decode key presses to text')
    decode_parser.add_argument('sequence', nargs='?',
                               help='Key presses to decode (or use -i for file)')
    decode_parser.add_argument('-i', '--input',
                               help='Input file (use - for stdin)')
    decode_parser.add_argument('-o', '--output',
                               help='Output file (default: stdout)')

    args = parser.parse_args(argv)

    try:
        if args.input:
            sequence = read_input(args.input)
        elif args.sequence is not None:
            sequence = args.sequence
        else:
            parser.error('Provide sequence or use -i for file input')

        write_output(decode(sequence), args.output)

    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
