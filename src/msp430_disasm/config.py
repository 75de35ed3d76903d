"""
Disassembler Configuration
==========================

Settings that shape a disassembly run. Configuration can come from:
- Default values (defined here)
- Environment variables (DisassemblerConfig.from_env)
- Command-line options (applied on top by the msp430dis CLI)

Environment variables (all optional):
    MSP430_DISASM_BASE_ADDRESS: Address of the first word (0x/$ hex or decimal)
    MSP430_DISASM_ALIASES: Use emulated mnemonics (1/0, true/false, yes/no)
    MSP430_DISASM_GENERATED_CONSTANTS: Let alias rules accept #0, #1, #2, #-1
    MSP430_DISASM_SHOW_WORDS: Include raw words in listings
    MSP430_DISASM_COUNT: Maximum number of instructions to decode

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from typing import Optional
import os

from .errors import ConfigError


ENV_PREFIX = "MSP430_DISASM_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_address(text: str) -> int:
    """
    Parse an address given as 0x-prefixed hex, $-prefixed hex or decimal.

    Raises:
        ConfigError: If the text is not a number in 0x0000-0xFFFF
    """
    value = text.strip()
    try:
        if value.lower().startswith("0x"):
            address = int(value, 16)
        elif value.startswith("$"):
            address = int(value[1:], 16)
        else:
            address = int(value)
    except ValueError:
        raise ConfigError(f"invalid address '{text}'") from None

    if not 0 <= address <= 0xFFFF:
        raise ConfigError(f"address must be 0-65535 (0x0000-0xFFFF), got '{text}'")
    return address


def parse_flag(text: str) -> bool:
    """Parse a boolean environment value."""
    value = text.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"invalid boolean value '{text}'")


@dataclass
class DisassemblerConfig:
    """
    Configuration for a disassembly run.

    Attributes:
        base_address: Byte address of the first word (default: 0)
        use_emulated: Render recognised double-operand encodings with their
                      emulated mnemonic, e.g. `ret` for `mov @SP+, PC`
                      (default: True)
        match_generated: Let constant alias rules (clr, inc, tst, ...) also
                         match constant-generator immediates such as #0,
                         not only absolute operands like &0 (default: False)
        show_words: Include the raw instruction words in listing lines
                    (default: True)
        max_instructions: Stop after this many instructions (default: all)
    """

    base_address: int = 0
    use_emulated: bool = True
    match_generated: bool = False
    show_words: bool = True
    max_instructions: Optional[int] = None

    @classmethod
    def from_env(cls) -> "DisassemblerConfig":
        """
        Create a DisassemblerConfig from environment variables.

        Raises:
            ConfigError: If a variable is set to an invalid value
        """
        config = cls()

        if address := os.environ.get(f"{ENV_PREFIX}BASE_ADDRESS"):
            config.base_address = parse_address(address)

        if aliases := os.environ.get(f"{ENV_PREFIX}ALIASES"):
            config.use_emulated = parse_flag(aliases)

        if generated := os.environ.get(f"{ENV_PREFIX}GENERATED_CONSTANTS"):
            config.match_generated = parse_flag(generated)

        if show_words := os.environ.get(f"{ENV_PREFIX}SHOW_WORDS"):
            config.show_words = parse_flag(show_words)

        if count := os.environ.get(f"{ENV_PREFIX}COUNT"):
            try:
                config.max_instructions = int(count)
            except ValueError:
                raise ConfigError(f"invalid instruction count '{count}'") from None

        config.validate()
        return config

    def validate(self) -> None:
        """
        Check value ranges.

        Raises:
            ConfigError: If a value is out of range
        """
        if not 0 <= self.base_address <= 0xFFFF:
            raise ConfigError(
                f"base address must be 0-65535 (0x0000-0xFFFF), got {self.base_address}"
            )
        if self.max_instructions is not None and self.max_instructions < 0:
            raise ConfigError(
                f"instruction count must not be negative, got {self.max_instructions}"
            )
