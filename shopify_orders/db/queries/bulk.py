"""
Bulk operation GraphQL queries and mutations.

This module contains the documents used to drive a bulk export:
- Start a bulk query
- Poll its status
- Cancel it
"""

# Start a bulk export for an anonymous query document
CREATE_BULK_OPERATION_MUTATION = """
mutation bulkOperationRunQuery($query: String!) {
  bulkOperationRunQuery(query: $query) {
    bulkOperation {
      id
      status
      createdAt
    }
    userErrors {
      field
      message
    }
  }
}
"""

# Bulk operation status query
BULK_OPERATION_STATUS_QUERY = """
query GetBulkOperationStatus($id: ID!) {
  node(id: $id) {
    ... on BulkOperation {
      id
      status
      errorCode
      createdAt
      completedAt
      objectCount
      fileSize
      url
      partialDataUrl
    }
  }
}
"""

# Cancel bulk operation mutation
CANCEL_BULK_OPERATION_MUTATION = """
mutation CancelBulkOperation($id: ID!) {
  bulkOperationCancel(id: $id) {
    bulkOperation {
      id
      status
    }
    userErrors {
      field
      message
    }
  }
}
"""
