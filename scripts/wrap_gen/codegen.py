"""
Code generation utilities

Provides the indented line buffer used for MATLAB and C++ output, the
file sink that writes a buffer to disk, and the namespace directory
helpers.
"""

import os
import sys

from .errors import OutputError


class CodeGen:
    """Code generation helper with indentation support"""

    def __init__(self, indent_str: str = '  '):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = indent_str

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def indent(self):
        """Increase indentation"""
        self._indent += 1

    def dedent(self):
        """Decrease indentation"""
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: str = '}'):
        """Context manager for code blocks"""
        return _BlockContext(self, header, footer)

    def output(self) -> str:
        """Get generated code as string"""
        return '\n'.join(self._lines)


class _BlockContext:
    """Context manager for indented code blocks"""

    def __init__(self, gen: CodeGen, header: str, footer: str):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        self._gen.line(self._footer)


class FileWriter(CodeGen):
    """Buffered output file

    Lines are collected in memory and only written by emit(). A file whose
    contents would not change is left untouched.
    """

    def __init__(self, filename: str, verbose: bool = False, comment_str: str = '//',
                 indent_str: str = '  '):
        super().__init__(indent_str)
        self.filename = filename
        self.verbose = verbose
        self.comment_str = comment_str

    def contents(self, add_header: bool = False) -> str:
        """Return what emit() would write"""
        text = self.output() + '\n'
        if add_header:
            text = f'{self.comment_str} automatically generated by wrap\n' + text
        return text

    def emit(self, add_header: bool = False, force_overwrite: bool = False) -> bool:
        """Write the buffer to disk, returns True if the file was written"""
        if self.verbose:
            print(f'generating {self.filename} ', end='', file=sys.stderr)

        new_contents = self.contents(add_header)
        existing_contents = None
        if os.path.exists(self.filename):
            with open(self.filename, 'r', newline='\n') as f:
                existing_contents = f.read()

        written = force_overwrite or existing_contents != new_contents
        if written:
            try:
                with open(self.filename, 'w', newline='\n') as f:
                    f.write(new_contents)
            except OSError as e:
                raise OutputError(f'Unable to open {self.filename}: {e}') from e

        if self.verbose:
            print('...complete' if written else '...no update', file=sys.stderr)
        return written


def create_namespace_structure(namespaces, toolbox_path: str) -> str:
    """Create one MATLAB package directory (+ns) per namespace segment

    Returns the innermost directory.
    """
    cur_path = toolbox_path
    for subdir in namespaces:
        cur_path = os.path.join(cur_path, '+' + subdir)
        if not os.path.isdir(cur_path):
            if os.path.exists(cur_path):
                raise OutputError(
                    f'Need to write files to directory {cur_path}, which already '
                    f'exists as a file but is not a directory')
            os.mkdir(cur_path)
    return cur_path
