ERRORS = {
  "E_READ": "File missing or unreadable",
  "E_READ_SHORT": "Fewer bytes read than the file's reported size",
  "E_ALLOC": "Could not allocate memory for file contents",
  "E_UNSUPPORTED_MARKER": "Unsupported marker",
  "E_TRUNCATED": "Segment runs past end of file",
  "E_BAD_LENGTH": "Segment length field smaller than 2",
  "E_WRITE": "Could not write file",
}

# File result statuses
STATUS_STRIPPED = "STRIPPED"
STATUS_UNCHANGED = "UNCHANGED"
STATUS_SKIPPED = "SKIPPED"
STATUS_FAILED = "FAILED"
