# chaindex

`chaindex` keeps the staking side of an indexed blockchain in an SQLite
database, and provides the data types for answering account and delegation
queries.

It covers these areas:

- **Coins** (`chaindex.coins`): exact decimal amounts (`Dec`), coins
  (`Coin`, `DecCoin`) and their database text form such as `(stake,100)` or
  `{"(stake,100)","(atom,5)"}` (`DbCoin`, `DbCoins`, `DbDecCoin`,
  `DbDecCoins`).
- **Row types** (`chaindex.rows`, `chaindex.gov_rows`,
  `chaindex.validator_rows`): one frozen dataclass per table row, with
  equality that compares what the table stores.
- **Records** (`chaindex.records`): the inputs handed to the database —
  `Validator`, `Description`, `ValidatorDescription`, `ValidatorCommission`,
  `ValidatorVotingPower`, `ValidatorStatus`, `DoubleSignVote`,
  `DoubleSignEvidence`.
- **Storage** (`chaindex.database`): saving and reading validators, their
  descriptions, commissions, voting powers, statuses, double-sign evidence and
  the list of enabled modules. Saves are height-aware: data at an older height
  never overwrites data at a newer one.
- **Batching** (`chaindex.batching`): splitting large inserts under the
  bound-parameter limit of a single statement.
- **Query building blocks** (`chaindex.actions`): configuration, payloads,
  data-source interfaces and JSON-ready response types for account and
  delegation queries.

## Storing validators

```python
from chaindex.database import Database, NotFoundError
from chaindex.validator_rows import ValidatorData

with Database("index.db") as db:
    db.save_validator_data(
        ValidatorData(
            "cosmosvalcons1qqqqrezrl53hujmpdch6d805ac75n220ku09rl",
            "cosmosvaloper1rcp29q3hpd246n6qak7jluqep4v006cdsc2kkl",
            "cosmosvalconspub1zcjduepq7mft6gfls57a0a42d7uhx656cckhfvtrlmw744jv4q0mvlv0dypskehfk8",
            "cosmos1z4hfrxvlgl4s8u4n5ngjcw8kdqrcv43599amxs",
            "1",
            "2",
            10,
        )
    )

    validator = db.get_validator("cosmosvaloper1rcp29q3hpd246n6qak7jluqep4v006cdsc2kkl")
    print(validator.parsed_max_rate())  # 1.000000000000000000

    try:
        db.get_validator("cosmosvaloper1unknown")
    except NotFoundError as err:
        print(err)
```

`Database()` with no path opens an in-memory database. The schema is created
when the database is opened.

Lookups that find nothing raise `NotFoundError`; failed statements raise
`DatabaseError` (of which `NotFoundError` is a subclass). `execute` and
`query` run raw statements; `query` returns rows as dictionaries.

The other savers follow the same pattern: `save_validator_description`,
`save_validator_commission`, `save_validators_voting_powers`,
`save_validators_statuses`, `save_double_sign_evidence` and
`insert_enable_modules`. A description field or avatar URL set to
`"[do-not-modify]"` keeps the stored value; a commission update with a `None`
field keeps the stored value of that field.

## Coins in database form

```python
from chaindex.coins import Dec, DbCoins

coins = DbCoins.parse(b'{"(stake,100)","(atom,5)"}')
for coin in coins:
    print(coin.to_value())  # (stake,100), then (atom,5)

print(Dec.with_prec(11, 3))  # 0.011000000000000000
```

`to_null_string` trims a text and turns an empty result into `None`;
`to_string` does the reverse.

## Splitting large batches

`chaindex.batching.split_accounts(accounts, params_number)` cuts a list of
accounts into slices, each of which fits one statement with `params_number`
columns per account under the 65535-parameter limit.

## Query building blocks

- `chaindex.actions.config`: `parse_config(data)` reads the `actions`
  section of a YAML document into an `ActionsConfig` (a port and optional
  node details), or returns `None` when the section is missing;
  `default_config()` uses port 3000.
- `chaindex.actions.sources`: the `BankSource`, `DistributionSource` and
  `StakingSource` protocols that a data provider implements, and the records
  they return.
- `chaindex.actions.payload`: `Payload.from_dict` reads a request of the form
  `{"input": {"address": ..., "height": ..., "offset": ..., "limit": ..., "count_total": ...}}`;
  `Context(node, sources).get_height(payload)` returns the requested height,
  or the node's latest height when the height is `0` or no payload is given.
- `chaindex.actions.responses`: response dataclasses, `convert_coins`,
  `convert_dec_coins`, and `to_jsonable`, which turns a response into values
  that `json.dumps` accepts (times in RFC 3339, bytes in base64).

## What this package does not do

It does not run a server: there is no HTTP endpoint, no request routing, and
no ready-made query handlers or metrics. It has no command-line program. It
does not talk to a chain node itself; data for queries must come from source
objects you supply. Storage covers only the validator tables and the enabled
modules list described above.