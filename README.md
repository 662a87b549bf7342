# ocean_client

A small client for the DigitalOcean v2 HTTP API. Each call is described by
an immutable `Request` built from a resource class, and is carried out by a
`DigitalOcean` client that holds your API token and a `requests` session.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

```python
from ocean_client.client import DigitalOcean
from ocean_client.api.region import Region
from ocean_client.api.volume import Volume
from ocean_client.api.load_balancer import LoadBalancer

client = DigitalOcean("token")

# List every region; further pages are followed for you.
regions = client.execute(Region.list())

# List at most ten volumes in one region.
volumes = Volume.list().region("nyc1").limit(10).execute(client)

# Create a volume.
volume = (
    Volume.create("data", 100)
    .description("scratch space")
    .region("nyc1")
    .execute(client)
)

# Create a load balancer with one forwarding rule.
balancer = (
    LoadBalancer.create("web", "nyc1")
    .forwarding_rule(("http", 80, "http", 8080))
    .redirect_http_to_https(True)
    .execute(client)
)

# Delete a volume by id.
Volume.delete("volume-id").execute(client)
```

Every builder method returns a new request and leaves the old one alone.
Nothing reaches the network until `execute` is called, either as
`request.execute(client)` or `client.execute(request)`. A request's `url`,
`method` (an `ocean_client.method.Method`) and JSON `body` can be read
before it is sent.

`DigitalOcean(token, session=None)` sends every call with a
`Authorization: Bearer <token>` header. Pass your own `requests.Session`
to control retries, proxies or timeouts.

### Listing and limits

List requests ask for up to 200 items per page (`per_page`) and follow the
`links.pages.next` URL of each response until there is none. `limit(n)`
asks for fewer items per page when `n` is below 200 and stops fetching
further pages once `n` items have been collected; the last page fetched is
returned whole, so the result may hold more than `n` items.

### Expected answers

- list and get: `200`; `404` raises `NotFound`.
- create: `201` or `202`; `422` raises `UnprocessableEntity`.
- update: `200`; `422` raises `UnprocessableEntity`.
- delete: `204`.

Any other status raises `UnexpectedStatus`.

## Errors

All failures are subclasses of `ocean_client.errors.ApiError`:

- `NotFound` — the item does not exist.
- `UnexpectedStatus` — the API answered with a status the call does not
  expect; the code is in `.status`.
- `UnprocessableEntity` — the request was refused; the API's decoded JSON
  reply is in `.detail`.
- `TransportError` — the HTTP exchange failed, or the response was not the
  JSON the call expects.
- `Unauthorized` is defined for callers' use; the client itself reports a
  `401` as `UnexpectedStatus`.

## Resources

Under `ocean_client.api`:

- `region.Region` — `list()`.
- `size.Size` — `list()`.
- `snapshot.Snapshot` — `list()`, `droplets()`, `volumes()`, `get(id)`,
  `delete(id)`.
- `ssh_key.SshKey` — `create(name, public_key)`, `list()`, `get(id)`,
  `update(id).name(...)`, `delete(id)`; ids or fingerprints are accepted.
- `tag.Tag` — `create(name)`, `get(name)`, `list()`, `delete(name)`, and
  `get(name).add_resources(...)` / `.remove_resources(...)` taking
  `(id, type)` pairs.
- `volume.Volume` — `list()` (with `.region(...)`), `create(name, size)`
  (with `.description`, `.region`, `.snapshot_id`), `get(id)`,
  `get_by_name(name, region)`, `delete(id)`, `delete_by_name(name, region)`,
  and `get(id).snapshots()` / `.snapshot(name)`.
- `load_balancer.LoadBalancer` — `create`, `get`, `list`, `update`,
  `delete`; create and update requests take `algorithm`, `forwarding_rule`,
  `health_check`, `sticky_sessions`, `redirect_http_to_https`, `droplets`
  and `tag` (update also `name` and `region`); `get(id)` builds
  `add_droplets`, `remove_droplets`, `add_forwarding_rules` and
  `remove_forwarding_rules`.
- `load_balancer_fields` — `ForwardingRule`, `HealthCheck` and
  `StickySessions`. Forwarding rules may be given as 4- to 6-item tuples:
  entry protocol, entry port, target protocol, target port, then optionally
  certificate id and TLS passthrough.

Each resource value is a frozen dataclass with `from_dict` and `to_dict`
for its JSON form.

## What it does not cover

Only the endpoints listed above are available. There are no builders for
accounts, actions, certificates, domains and domain records, Droplets and
their actions, floating IPs, images, or volume attach/detach/resize actions.
There is no command-line program and no caching of responses.