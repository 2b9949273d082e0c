# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor
"""
Commandline CRC calculator.

    $ echo -n 123456789 | python3 -m bcrc -qc crc32
    0xcbf43926
    $ echo -n 123456789 | python3 -m bcrc -qc "custom: width=16 poly=0x1021 init=0xffff"
    0x29b1
    $ python3 -m bcrc --list
"""

import argparse
import re
import sys

from .catalogue import CRC_CATALOGUE, STANDARD_CATALOGUE, lookup
from .engine import BasicCrc, OptimalCrc, residue_const
from .errors import CatalogueFormatError, CrcError
from .params import parse_crc_params


def _test_crc(name, params, check, residue, alias=()):
    w = (params.width+3)//4
    print('{:25s} {}'.format(name, params))

    results = []
    for crc in (OptimalCrc(params), BasicCrc(params)):
        crc_1 = crc.compute(b'123456789')

        # Calculating the same CRC by feeding in the data in smaller chunks
        # including zero-sized chunks.
        crc.reset()
        for chunk in (b'', b'1', b'234', b'', b'56', b'789', b''):
            crc.process_bytes(chunk)
        crc_2 = crc.checksum()

        residue_1 = residue_const(crc, b'hope it works...')
        residue_2 = residue_const(crc)
        results.append((crc_1, crc_2, residue_1, residue_2))

    crc_1, crc_2, residue_1, residue_2 = results[0]
    print('{:25s} expected:    check={:0{w}x} residue={:0{w}x}\n'
          '{:25s} test_output: check={:0{w}x} residue={:0{w}x}'.format
          ('', check, residue, '', crc_1, residue_1, w=w))
    if alias:
        print('{:25s} aliases:     {}'.format('', ', '.join(alias)))

    if results[0] != results[1]:
        print('The table-driven and the bit-serial CRC returned different results.')
        return False
    if crc_1 != crc_2:
        print('Chunked CRC calculation failed.')
        return False
    if crc_1 != check:
        print('CRC doesn\'t match the reference "check" value.')
        return False
    if residue_1 != residue_2:
        print('The residue calculations returned conflicting results.')
        return False
    if residue_1 != residue:
        print('The residue value does not match the reference constant.')
        return False
    return True


def _test_and_list_catalogue_entries(crc_catalogue):
    passed, failed = [], []
    for entry in crc_catalogue:
        if _test_crc(entry.name, entry.params, entry.check, entry.residue, entry.alias):
            passed.append(entry.name)
        else:
            failed.append(entry.name)
    if failed:
        print('Failed CRCs: ' + ', '.join(failed))
    print('Number of failed CRC algorithms: %s' % len(failed))
    print('Number of CRC algorithms that passed the test: %s' % len(passed))
    return not failed


def _input_iterator_hex(infile, max_chunk_size=16*1024):
    p_space = re.compile(rb'\s+')
    p_hex = re.compile(rb'^[0-9a-fA-F]*$')

    # An odd number of nibbles in a chunk leaves half a byte for the next one.
    leftover = b''
    while 1:
        chunk = infile.read(max_chunk_size)
        if not chunk:
            break
        chunk = p_space.sub(b'', chunk)
        if not p_hex.match(chunk):
            raise CrcError('invalid input character - '
                           'allowed characters: hex digits, whitespace')
        chunk = leftover + chunk
        leftover = b''
        if len(chunk) & 1:
            leftover = chunk[-1:]
            chunk = chunk[:-1]
        if chunk:
            yield bytes.fromhex(chunk.decode('ascii'))
    if leftover:
        raise CrcError('unconsumed nibble at the end of input stream: '
                       + leftover.decode('ascii'))


def _input_iterator(infile, input_format):
    if input_format == 'hex':
        yield from _input_iterator_hex(infile)
        return

    assert input_format == 'binary'
    MAX_CHUNK_SIZE = 128 * 1024
    while 1:
        chunk = infile.read(MAX_CHUNK_SIZE)
        if not chunk:
            break
        yield chunk


def _calc_crc(args):
    name = args.crc.strip()
    custom_prefix = 'custom:'
    if name.lower().startswith(custom_prefix):
        try:
            params = parse_crc_params(name[len(custom_prefix):].strip())['params']
        except CatalogueFormatError as ex:
            raise CrcError('invalid "CUSTOM:" CRC parameters: %s' % ex) from ex
        name = 'CUSTOM'
    else:
        params = lookup(name).params

    crc = BasicCrc(params) if args.tableless else OptimalCrc(params)

    if not args.quiet:
        print('{} {!r}'.format(name, crc))

    if args.format == '0xhex':
        fmt_str = '0x{:0{w}x}'
    elif args.format == 'hex':
        fmt_str = '{:0{w}x}'
    else:
        fmt_str = '{!r}'
    w = (params.width+3)//4

    if args.residue_const:
        v = residue_const(crc)
        fmt_str = fmt_str if args.quiet else 'residue constant: ' + fmt_str
        print(fmt_str.format(v, w=w))
        return

    bytes_processed = 0
    for chunk in _input_iterator(args.infile, args.input_format):
        crc.process_bytes(chunk)
        bytes_processed += len(chunk)
    if not args.quiet:
        print('number of bytes processed: %s' % bytes_processed)
        fmt_str = 'crc: ' + fmt_str
    print(fmt_str.format(crc.checksum(), w=w))


def main(argv=None):
    p = argparse.ArgumentParser(prog='bcrc', description='Parametric CRC calculator.')
    p.add_argument('-l', '--list', action='store_true', help=
                   'list and test all builtin CRC algorithms')
    p.add_argument('--residue-const', action='store_true', help=
                   'calculate the residue constant for the specified CRC '
                   'algorithm (this requires no input data)')
    p.add_argument('-c', '--crc', help='the name of the CRC algorithm or'
                   ' "CUSTOM: width=X poly=Y ..."')
    p.add_argument('-t', '--tableless', action='store_true', help=
                   'use the bit-serial implementation instead of the table')
    p.add_argument('-i', '--input-format', choices=['binary', 'hex'],
                   default='binary', help='input data format')
    p.add_argument('-f', '--format', choices=['0xhex', 'hex', 'decimal'],
                   default='0xhex', help='output format of the crc or '
                   'residue constant')
    p.add_argument('-q', '--quiet', action='store_true', help=
                   'output only the result of the calculation')
    p.add_argument('infile', nargs='?', type=argparse.FileType('rb'), help=
                   'name of the input file, default: stdin', default=sys.stdin)
    args = p.parse_args(argv)

    from_stdin = args.infile is sys.stdin
    if from_stdin:
        args.infile = sys.stdin.buffer # we want to read binary data not strings

    try:
        if args.list:
            ok = _test_and_list_catalogue_entries(STANDARD_CATALOGUE + CRC_CATALOGUE)
            sys.exit(0 if ok else 1)

        if args.crc:
            try:
                _calc_crc(args)
            except CrcError as ex:
                print('error: %s' % ex, file=sys.stderr)
                sys.exit(1)
            sys.exit(0)

        p.print_help()
        sys.exit(2)
    finally:
        if not from_stdin:
            args.infile.close()


if __name__ == '__main__':
    main()
