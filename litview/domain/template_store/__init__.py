"""This module handles fetching template sources from storage."""
from .template_store import TemplateStore
from .file_system_template_store import FilesystemTemplateStore
from .in_memory_template_store import InMemoryTemplateStore
