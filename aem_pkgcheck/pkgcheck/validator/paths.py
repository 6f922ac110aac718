"""Fixed locations inside a content package."""

MANIFEST_DIR = "META-INF/vault/"
CONTENT_ROOT = "jcr_root/"
FILTER_XML = "META-INF/vault/filter.xml"
PROPERTIES_XML = "META-INF/vault/properties.xml"
CONTENT_DESCRIPTOR = ".content.xml"
QUERY_EXTENSION = ".graphql"


def persisted_queries_dir(project_name: str) -> str:
    return f"{CONTENT_ROOT}conf/{project_name}/settings/graphql/persistentQueries/"
