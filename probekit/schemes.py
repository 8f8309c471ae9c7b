"""URL scheme names and scheme combinations used for probing."""

HTTP = "http"
HTTPS = "https"
HTTP_OR_HTTPS = "http|https"
HTTP_AND_HTTPS = "http&https"