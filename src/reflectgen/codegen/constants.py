# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Names of the runtime macros and symbols the generated code relies on."""

# Conditional compilation for development-only content.
DEV_TOOLS_DEFINE = "EE_DEVELOPMENT_TOOLS"
DEV_TOOLS_ONLY_MACRO = "EE_DEVELOPMENT_TOOLS_ONLY"

HALT = "EE_HALT();"
UNREACHABLE = "EE_UNREACHABLE_CODE();"

# Root of every reflected structure hierarchy; registered by the runtime itself.
INTERNAL_ROOT_TYPES = frozenset({"EE::IReflectedType"})

SEPARATOR = "//-------------------------------------------------------------------------"
BANNER = "// This is an auto-generated file - DO NOT edit"

DEFAULT_RUNTIME_REGISTRATION_FILE = "Code/Base/TypeSystem/_AutoGenerated/RuntimeTypeRegistration.h"
DEFAULT_TOOLS_REGISTRATION_FILE = "Code/Base/TypeSystem/_AutoGenerated/ToolsTypeRegistration.h"
