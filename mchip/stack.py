#!/usr/bin/env python3

"""
Stack Emulator

The call stack lives outside system RAM, since programs have no way of
addressing it.  It is a fixed array of 16-bit return addresses with an explicit
stack pointer (SP), which always indexes the next free slot.  SP runs from 0
(empty) to the stack size (full).

Pushing onto a full stack or popping an empty one is a broken program, so both
raise rather than wrapping SP around into the other end of the array.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size):
        self.size = size
        self.items = [0] * size
        self.pointer = 0

    def push(self, item):
        if self.pointer >= self.size:
            raise StackError("Stack overflow")

        self.items[self.pointer] = item & 0xFFFF
        self.pointer += 1

    def pop(self):
        if self.pointer <= 0:
            raise StackError("Stack underflow")

        self.pointer -= 1
        return self.items[self.pointer]

    def clear(self):
        for slot in range(self.size):
            self.items[slot] = 0

        self.pointer = 0

    def get_items(self):
        # For debugging.  Only the live part of the stack, oldest first.
        return self.items[:self.pointer]
