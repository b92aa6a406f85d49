import pytest

NESTED_SCHEMA = """\
message document {
  required int64 id = 1;
  optional group links {
    repeated int64 backward;
    repeated int64 forward;
  }
  repeated group name {
    repeated group language {
      required binary code (STRING);
      optional binary country;
    }
    optional binary url (STRING);
  }
  optional fixed_len_byte_array(16) uuid (UUID) = 7;
  optional int64 created (TIMESTAMP(MILLIS, false));
}
"""


@pytest.fixture  # type: ignore[misc]
def nested_schema() -> str:
    return NESTED_SCHEMA
