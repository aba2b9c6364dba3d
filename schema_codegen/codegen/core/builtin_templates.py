"""
Built-in templates bundled with the package.

Each template renders one table. Available context:

    struct_name, table_name, package_name, current_language, imports,
    config (nullable_strategy, field_prefix, struct_name_case, field_name_case),
    columns[] (field_name, lang_type, lang_tags, is_nullable,
               original_column_name, comment, default_value, is_primary_key)
"""

GO_STRUCT_TEMPLATE = """\
// Code generated by schema-codegen. DO NOT EDIT.

package {{ package_name }}
{% if imports %}

import (
{% for imp in imports %}
    "{{ imp }}"
{% endfor %}
)
{% endif %}

// {{ struct_name }} maps the {{ table_name }} table.
type {{ struct_name }} struct {
{% for column in columns %}
{% if column.comment %}
    // {{ column.comment }}
{% endif %}
    {{ column.field_name }} {{ column.lang_type }}{{ " " ~ column.lang_tags if column.lang_tags else "" }}
{% endfor %}
}
"""

RUST_STRUCT_TEMPLATE = """\
// Code generated by schema-codegen. DO NOT EDIT.
{% for imp in imports %}
use {{ imp }};
{% endfor %}

/// Maps the `{{ table_name }}` table.
#[derive(Debug, Clone)]
pub struct {{ struct_name }} {
{% for column in columns %}
{% if column.comment %}
    /// {{ column.comment }}
{% endif %}
{% if column.lang_tags %}
    {{ column.lang_tags }}
{% endif %}
    pub {{ column.field_name }}: {{ column.lang_type }},
{% endfor %}
}
"""

TYPESCRIPT_INTERFACE_TEMPLATE = """\
// Code generated by schema-codegen. DO NOT EDIT.
{% for imp in imports %}
import "{{ imp }}";
{% endfor %}

/** Maps the {{ table_name }} table. */
export interface {{ struct_name }} {
{% for column in columns %}
{% if column.comment %}
  /** {{ column.comment }} */
{% endif %}
  {{ column.field_name }}{{ "?" if column.is_nullable and config.nullable_strategy == "optional_property" else "" }}: {{ column.lang_type }};
{% endfor %}
}
"""

PYTHON_CLASS_TEMPLATE = '''\
"""{{ struct_name }} model for the {{ table_name }} table."""

from dataclasses import dataclass
{% for imp in imports %}
{% if "." in imp %}
from {{ imp.rsplit(".", 1)[0] }} import {{ imp.rsplit(".", 1)[1] }}
{% else %}
import {{ imp }}
{% endif %}
{% endfor %}


@dataclass
class {{ struct_name }}:
{% for column in columns %}
{% if column.comment %}
    # {{ column.comment }}
{% endif %}
{% if column.lang_tags %}
    {{ column.lang_tags }}
{% endif %}
    {{ column.field_name }}: {{ column.lang_type }}
{% else %}
    pass
{% endfor %}
'''

JAVA_CLASS_TEMPLATE = """\
package {{ package_name }};
{% if imports %}

{% for imp in imports %}
import {{ imp }};
{% endfor %}
{% endif %}

/**
 * Maps the {{ table_name }} table.
 */
public class {{ struct_name }} {
{% for column in columns %}
{% if column.comment %}
    /** {{ column.comment }} */
{% endif %}
{% if column.lang_tags %}
    {{ column.lang_tags }}
{% endif %}
    private {{ column.lang_type }} {{ column.field_name }};
{% endfor %}
{% for column in columns %}

    public {{ column.lang_type }} get{{ column.field_name | capitalize_first }}() {
        return {{ column.field_name }};
    }

    public void set{{ column.field_name | capitalize_first }}({{ column.lang_type }} {{ column.field_name }}) {
        this.{{ column.field_name }} = {{ column.field_name }};
    }
{% endfor %}
}
"""

CSHARP_CLASS_TEMPLATE = """\
{% for imp in imports %}
using {{ imp }};
{% endfor %}
{% if imports %}

{% endif %}
namespace {{ package_name | pascal_case }};

/// <summary>Maps the {{ table_name }} table.</summary>
public class {{ struct_name }}
{
{% for column in columns %}
{% if column.comment %}
    /// <summary>{{ column.comment }}</summary>
{% endif %}
{% if column.lang_tags %}
    {{ column.lang_tags }}
{% endif %}
    public {{ column.lang_type }} {{ column.field_name | pascal_case }} { get; set; }
{% endfor %}
}
"""

PHP_CLASS_TEMPLATE = """\
<?php

declare(strict_types=1);

namespace {{ package_name | pascal_case }};
{% if imports %}

{% for imp in imports %}
use {{ imp }};
{% endfor %}
{% endif %}

/**
 * Maps the {{ table_name }} table.
 */
class {{ struct_name }}
{
{% for column in columns %}
{% if column.lang_tags %}
    {{ column.lang_tags }}
{% endif %}
    public {{ column.lang_type }} ${{ column.field_name }}{{ " = null" if column.is_nullable else "" }};
{% endfor %}
}
"""

RUBY_CLASS_TEMPLATE = """\
# frozen_string_literal: true
{% for imp in imports %}
require "{{ imp }}"
{% endfor %}

# Maps the {{ table_name }} table.
class {{ struct_name }}
{% for column in columns %}
  # @return [{{ column.lang_type }}{{ ", nil" if column.is_nullable else "" }}]
  attr_accessor :{{ column.field_name | snake_case }}
{% endfor %}
end
"""

SWIFT_STRUCT_TEMPLATE = """\
import Foundation
{% for imp in imports %}
import {{ imp }}
{% endfor %}

/// Maps the {{ table_name }} table.
struct {{ struct_name }}: Codable {
{% for column in columns %}
    var {{ column.field_name }}: {{ column.lang_type }}
{% endfor %}
}
"""

KOTLIN_CLASS_TEMPLATE = """\
package {{ package_name }}
{% if imports %}

{% for imp in imports %}
import {{ imp }}
{% endfor %}
{% endif %}

/** Maps the {{ table_name }} table. */
data class {{ struct_name }}(
{% for column in columns %}
    val {{ column.field_name }}: {{ column.lang_type }}{{ " = null" if column.is_nullable else "" }}{{ "," if not loop.last else "" }}
{% endfor %}
)
"""

DART_CLASS_TEMPLATE = """\
{% for imp in imports %}
import '{{ imp }}';
{% endfor %}

/// Maps the {{ table_name }} table.
class {{ struct_name }} {
{% for column in columns %}
  final {{ column.lang_type }} {{ column.field_name }};
{% endfor %}

  const {{ struct_name }}({
{% for column in columns %}
    {{ "" if column.is_nullable else "required " }}this.{{ column.field_name }},
{% endfor %}
  });
}
"""

ZIG_STRUCT_TEMPLATE = """\
{% for imp in imports %}
const {{ imp | snake_case }} = @import("{{ imp }}");
{% endfor %}

/// Maps the {{ table_name }} table.
pub const {{ struct_name }} = struct {
{% for column in columns %}
    {{ column.field_name }}: {{ column.lang_type }}{{ " = null" if column.is_nullable else "" }},
{% endfor %}
};
"""

NIM_TYPE_TEMPLATE = """\
{% for imp in imports %}
import {{ imp }}
{% endfor %}

type
  {{ struct_name }}* = object
    ## Maps the {{ table_name }} table.
{% for column in columns %}
    {{ column.field_name }}*: {{ column.lang_type }}
{% endfor %}
"""

HASKELL_DATA_TEMPLATE = """\
module {{ package_name | pascal_case }}.{{ struct_name }} where
{% if imports %}

{% for imp in imports %}
import {{ imp }}
{% endfor %}
{% endif %}

-- | Maps the {{ table_name }} table.
data {{ struct_name }} = {{ struct_name }}
{% for column in columns %}
  {{ "{" if loop.first else "," }} {{ column.field_name | uncapitalize }} :: {{ column.lang_type }}
{% endfor %}
{% if columns %}
  } deriving (Show, Eq)
{% else %}
  deriving (Show, Eq)
{% endif %}
"""

ELIXIR_STRUCT_TEMPLATE = """\
defmodule {{ package_name | pascal_case }}.{{ struct_name }} do
  @moduledoc "Maps the {{ table_name }} table."
{% for imp in imports %}
  alias {{ imp }}
{% endfor %}

  @type t :: %__MODULE__{
{% for column in columns %}
          {{ column.field_name | snake_case }}: {{ column.lang_type }}{{ "," if not loop.last else "" }}
{% endfor %}
        }

  defstruct [
{% for column in columns %}
    :{{ column.field_name | snake_case }}{{ "," if not loop.last else "" }}
{% endfor %}
  ]
end
"""

CRYSTAL_CLASS_TEMPLATE = """\
{% for imp in imports %}
require "{{ imp }}"
{% endfor %}

# Maps the {{ table_name }} table.
class {{ struct_name }}
{% for column in columns %}
  property {{ column.field_name | snake_case }} : {{ column.lang_type }}
{% endfor %}
end
"""

OCAML_TYPE_TEMPLATE = """\
{% for imp in imports %}
open {{ imp }}
{% endfor %}

(* Maps the {{ table_name }} table. *)
type {{ struct_name | snake_case }} = {
{% for column in columns %}
  {{ column.field_name | snake_case }} : {{ column.lang_type }};
{% endfor %}
}
"""

BUILTIN_TEMPLATES = {
    "go_struct.j2": GO_STRUCT_TEMPLATE,
    "rust_struct.j2": RUST_STRUCT_TEMPLATE,
    "typescript_interface.j2": TYPESCRIPT_INTERFACE_TEMPLATE,
    "python_class.j2": PYTHON_CLASS_TEMPLATE,
    "java_class.j2": JAVA_CLASS_TEMPLATE,
    "csharp_class.j2": CSHARP_CLASS_TEMPLATE,
    "php_class.j2": PHP_CLASS_TEMPLATE,
    "ruby_class.j2": RUBY_CLASS_TEMPLATE,
    "swift_struct.j2": SWIFT_STRUCT_TEMPLATE,
    "kotlin_class.j2": KOTLIN_CLASS_TEMPLATE,
    "dart_class.j2": DART_CLASS_TEMPLATE,
    "zig_struct.j2": ZIG_STRUCT_TEMPLATE,
    "nim_type.j2": NIM_TYPE_TEMPLATE,
    "haskell_data.j2": HASKELL_DATA_TEMPLATE,
    "elixir_struct.j2": ELIXIR_STRUCT_TEMPLATE,
    "crystal_class.j2": CRYSTAL_CLASS_TEMPLATE,
    "ocaml_type.j2": OCAML_TYPE_TEMPLATE,
}
