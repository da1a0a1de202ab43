"""Custom exceptions used throughout the chip8 package."""

from typing import Any, Optional


class Chip8Error(Exception):
    """Base exception for all virtual machine errors.

    All chip8-specific exceptions should inherit from this class.
    This allows catching all machine errors with a single except clause.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """

        super().__init__(message)
        self.details = details or {}


class ConfigurationError(Chip8Error):
    """Raised when there's an error in configuration.

    This includes:
    - Invalid configuration value
    - Missing required configuration
    - Configuration validation failures
    """

    def __init__(
        self,
        config_key: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize configuration error.

        Args:
            config_key: The configuration key that caused the error
            message: Description of what's wrong. If omitted, config_key is
                treated as the message and the key defaults to "configuration".
            details: Additional context
        """
        if message is None:
            message = config_key or "Invalid configuration"
            config_key = "configuration"
        if config_key is None:
            config_key = "configuration"

        full_message = f"Configuration error for '{config_key}': {message}"
        super().__init__(message=full_message, details=details)
        self.config_key = config_key


class MemoryException(Chip8Error):
    """Base exception for all memory-related errors.

    Raised for invalid memory accesses, permissions, or alignment violations.
    """

    def __init__(
        self,
        message: str,
        address: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if address is not None:
            details = details or {}
            details["address"] = f"0x{address:04X}"

        super().__init__(message=message, details=details)
        self.address = address


class MemoryPermissionError(MemoryException):
    """Raised when attempting an operation not allowed on a memory region.

    Examples:
    - Writing into the font table
    """

    def __init__(
        self,
        address: int,
        operation: str,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"Memory permission error: cannot {operation} at 0x{address:04X}"
        super().__init__(message=message, address=address, details=details)
        self.operation = operation


class MemoryAlignmentError(MemoryException):
    """Raised when an instruction fetch is not properly aligned.

    Examples:
    - Program counter left on an odd address by a computed jump
    """

    def __init__(
        self,
        address: int,
        size: int,
        details: Optional[dict[str, Any]] = None,
    ):
        message = (
            f"Unaligned memory access at 0x{address:04X} "
            f"for access size {size} bytes"
        )
        super().__init__(message=message, address=address, details=details)
        self.size = size


class MemoryBoundsError(MemoryException):
    """Raised when a memory access exceeds the bounds of a region.

    Examples:
    - Instruction fetch at the last byte of RAM
    - Sprite or register transfer running past the end of RAM
    """

    def __init__(
        self,
        address: int,
        size: int,
        region: str,
        details: Optional[dict[str, Any]] = None,
    ):
        message = (
            f"Out-of-bounds access in {region}: "
            f"address=0x{address:04X}, size={size}"
        )
        super().__init__(message=message, address=address, details=details)
        self.size = size
        self.region = region


class StackError(Chip8Error):
    """Base exception for call stack faults."""

    def __init__(
        self,
        message: str,
        pointer: int,
        depth: int,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        details["pointer"] = pointer
        details["depth"] = depth
        super().__init__(message=message, details=details)
        self.pointer = pointer
        self.depth = depth


class StackOverflowError(StackError):
    """Raised when a call is made with every stack slot occupied."""

    def __init__(self, pointer: int, depth: int):
        super().__init__(
            message=f"Stack overflow: {pointer} of {depth} slots in use",
            pointer=pointer,
            depth=depth,
        )


class StackUnderflowError(StackError):
    """Raised when returning with an empty stack."""

    def __init__(self, pointer: int, depth: int):
        super().__init__(
            message="Stack underflow: return with empty call stack",
            pointer=pointer,
            depth=depth,
        )


class UnknownOpcodeError(Chip8Error):
    """Raised when an instruction word matches no known instruction."""

    def __init__(
        self,
        opcode: int,
        address: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        details["opcode"] = f"0x{opcode:04X}"
        message = f"Unimplemented opcode 0x{opcode:04X}"
        if address is not None:
            details["address"] = f"0x{address:04X}"
            message += f" at 0x{address:04X}"
        super().__init__(message=message, details=details)
        self.opcode = opcode
        self.address = address


class ProgramLoadError(Chip8Error):
    """Raised when a program image does not fit in the program area."""

    def __init__(
        self,
        size: int,
        capacity: int,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        details["size"] = size
        details["capacity"] = capacity
        message = f"Program of {size} bytes exceeds program area of {capacity} bytes"
        super().__init__(message=message, details=details)
        self.size = size
        self.capacity = capacity
