"""GraphQL documents used to read and toggle pull request auto-merge."""

GET_PULL_REQUEST_AUTO_MERGE_QUERY = """
query getPullRequest($owner: String!, $repo: String!, $number: Int!) {
  repository(name: $repo, owner: $owner) {
    pullRequest(number: $number) {
      autoMergeRequest {
        mergeMethod
      }
    }
  }
}
"""

ENABLE_AUTO_MERGE_MUTATION = """
mutation enableAutoMerge($pullRequestId: ID!, $strategy: PullRequestMergeMethod) {
  enablePullRequestAutoMerge(input: {pullRequestId: $pullRequestId, mergeMethod: $strategy}) {
    pullRequest {
      id
      autoMergeRequest {
        enabledAt
        mergeMethod
      }
    }
  }
}
"""

DISABLE_AUTO_MERGE_MUTATION = """
mutation disableAutoMerge($pullRequestId: ID!) {
  disablePullRequestAutoMerge(input: {pullRequestId: $pullRequestId}) {
    pullRequest {
      id
      autoMergeRequest {
        enabledAt
        mergeMethod
      }
    }
  }
}
"""

MERGE_BRANCH_MUTATION = """
mutation mergeBranch($repositoryId: ID!, $base: String!, $head: String!, $commitMessage: String) {
  mergeBranch(input: {repositoryId: $repositoryId, base: $base, head: $head, commitMessage: $commitMessage}) {
    mergeCommit {
      oid
    }
  }
}
"""

NOT_AUTO_MERGEABLE_ERROR_MESSAGES = (
    "not in the correct state to enable auto-merge",
    "clean status",
)
"""Substrings of GitHub errors meaning the pull request has nothing pending and can merge now."""
