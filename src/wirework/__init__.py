"""Wirework declarative component builder.

Wirework builds configured objects from an XML document without any
construction code per component type. A section names the class to build and
lists its parameters; each parameter is handed to the matching ``set_*``
method of the new instance, converted to the type that method declares.

Key Features:
    - Class resolution by registered name or dotted import path, with a
      capability (base class or protocol) check
    - Scalar, list and map parameters detected from the document's structure
    - Fixed text-to-value conversions driven by mutator annotations
    - Composite components wrapping an ordered list of children
    - Optional initialize/validate lifecycle on every built instance

Basic Usage:
    >>> from wirework.builders import build_single
    >>>
    >>> xml = b'''
    ... <properties>
    ...   <fetcher class="my_app.fetchers.FileSystemFetcher">
    ...     <params>
    ...       <basePath>/data</basePath>
    ...       <extractFileSystemMetadata>true</extractFileSystemMetadata>
    ...     </params>
    ...   </fetcher>
    ... </properties>'''
    >>> fetcher = build_single("fetcher", Fetcher, xml)

The framework consists of several core modules:
    - builders: High-level build functions
    - component_builder: Single and composite builds from document sections
    - registry: Class registration and resolution
    - document: Loading documents and navigating sections
    - classifier: Scalar/list/map detection for parameter nodes
    - params: Mutator lookup and parameter application
    - coercion: Conversion of parameter text to mutator types
    - lifecycle: Post-configuration initialize/validate support
    - config_base: Mixin for self-configuring objects
    - domain: Core domain models (classified values, settings records)
    - errors: Framework-specific exceptions
"""
