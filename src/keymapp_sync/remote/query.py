"""
query.py - GraphQL query document for layout revisions.

The selection set mirrors what Keymapp itself requests, so the stored
payload carries every field Keymapp reads back from the revision table.
"""

from typing import Any, Final

from keymapp_sync.address import LayoutAddress
from keymapp_sync.config import LAYOUT_OPERATION_NAME

LAYOUT_QUERY: Final[str] = """
query getLayout($hashId: String!, $revisionId: String!, $geometry: String) {
	layout(hashId: $hashId, geometry: $geometry, revisionId: $revisionId) {
		...LayoutData
	}
}
fragment LayoutData on Layout {
	privacy
	geometry
	hashId
	parent {
		hashId
	}
	tags {
		id
		hashId
		name
	}
	title
	user {
		annotation
		annotationPublic
		name
		hashId
		pictureUrl
	}
	isDefault
	revision {
		...RevisionData
	}
	lastRevisionCompiled
	isLatestRevision
}
fragment RevisionData on Revision {
	createdAt
	hashId
	model
	title
	config
	swatch
	qmkVersion
	qmkUptodate
	hasDeletedLayers
	md5
	combos {
		keyIndices
		layerIdx
		name
		trigger
	}
	tour {
		...TourData
	}
	layers {
		builtIn
		hashId
		keys
		position
		title
		color
		prevHashId
	}
}
fragment TourData on Tour {
	hashId url steps: tourSteps {
		hashId intro outro position content keyIndex layer {
			hashId position
		}
	}
}
"""


def build_layout_query(address: LayoutAddress) -> dict[str, Any]:
    """Return the GraphQL request document for one layout revision."""
    return {
        "operationName": LAYOUT_OPERATION_NAME,
        "variables": {
            "hashId": address.layout_id,
            "geometry": address.geometry,
            "revisionId": address.revision_id,
        },
        "query": LAYOUT_QUERY,
    }
