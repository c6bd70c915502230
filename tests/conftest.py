"""Pytest configuration and fixtures."""

import json

import pytest


@pytest.fixture
def sample_description():
    """Describe output for a package with one library product and two targets."""
    return """
{
  "dependencies" : [

  ],
  "manifest_display_name" : "PackageDescription",
  "name" : "PackageDescription",
  "path" : "/Users/dev/Projects/PackageDescription",
  "platforms" : [

  ],
  "products" : [
    {
      "name" : "PackageDescription",
      "targets" : [
        "PackageDescription"
      ],
      "type" : {
        "library" : [
          "automatic"
        ]
      }
    }
  ],
  "targets" : [
    {
      "c99name" : "PackageDescriptionTests",
      "module_type" : "SwiftTarget",
      "name" : "PackageDescriptionTests",
      "path" : "Tests/PackageDescriptionTests",
      "sources" : [
        "PackageDescriptionTests.swift"
      ],
      "target_dependencies" : [
        "PackageDescription"
      ],
      "type" : "test"
    },
    {
      "c99name" : "PackageDescription",
      "module_type" : "SwiftTarget",
      "name" : "PackageDescription",
      "path" : "Sources/PackageDescription",
      "product_memberships" : [
        "PackageDescription"
      ],
      "sources" : [
        "DescribedPackage.swift"
      ],
      "type" : "library"
    }
  ],
  "tools_version" : "5.9"
}
"""


@pytest.fixture
def full_document():
    """Describe output exercising dependencies, platforms, resources and plugins."""
    return {
        "name": "Server",
        "manifest_display_name": "Server",
        "path": "/work/Server",
        "tools_version": "5.9",
        "default_localization": "en",
        "c_language_standard": "c11",
        "cxx_language_standard": "c++17",
        "swift_languages_versions": ["5"],
        "dependencies": [
            {"type": "fileSystem", "identity": "utils", "path": "/work/Utils"},
            {
                "type": "sourceControl",
                "identity": "swift-nio",
                "url": "https://github.com/apple/swift-nio.git",
                "requirement": {
                    "range": [{"lower_bound": "2.0.0", "upper_bound": "3.0.0"}]
                },
            },
            {
                "type": "registry",
                "identity": "mona.linkedlist",
                "requirement": {"exact": ["1.2.0"]},
            },
        ],
        "platforms": [
            {"name": "macos", "version": "13.0"},
            {"name": "ios", "version": "16.0", "options": ["simulator"]},
        ],
        "products": [
            {"name": "server", "targets": ["Server"], "type": {"executable": None}},
            {"name": "Formatter", "targets": ["FormatterPlugin"], "type": {"plugin": None}},
        ],
        "targets": [
            {
                "name": "Server",
                "c99name": "Server",
                "type": "executable",
                "module_type": "SwiftTarget",
                "path": "Sources/Server",
                "sources": ["main.swift", "Routes.swift"],
                "resources": [
                    {"path": "Sources/Server/Public", "rule": {"copy": {}}},
                    {"path": "Sources/Server/en.lproj", "rule": {"process": {"localization": "en"}}},
                    {"path": "Sources/Server/banner.txt", "rule": {"embed_in_code": {}}},
                ],
                "product_dependencies": ["NIO"],
                "product_memberships": ["server"],
            },
            {
                "name": "FormatterPlugin",
                "c99name": "FormatterPlugin",
                "type": "plugin",
                "module_type": "PluginTarget",
                "path": "Plugins/FormatterPlugin",
                "sources": ["plugin.swift"],
                "plugin_capability": {
                    "type": "command",
                    "intent": {
                        "type": "custom",
                        "verb": "format-source-code",
                        "description": "Formats the package sources",
                    },
                    "permissions": [
                        {
                            "type": "writeToPackageDirectory",
                            "reason": "Rewrites formatted files",
                            "network_scope": {"none": {}},
                        },
                        {
                            "type": "allowNetworkConnections",
                            "reason": "Downloads style rules",
                            "network_scope": {"local": {"ports": [8080, 8443]}},
                        },
                    ],
                },
            },
        ],
    }


@pytest.fixture
def full_description(full_document):
    """The full document serialized as UTF-8 JSON bytes."""
    return json.dumps(full_document).encode("utf-8")
