from review_loader.db.postgres import connect
from review_loader.core.config import settings


def dump(conn, table: str):
    with conn.cursor() as cur:
        cur.execute(
            "SELECT indexname, indexdef FROM pg_indexes "
            "WHERE tablename = %s ORDER BY indexname",
            (table,),
        )
        idx = cur.fetchall()
    print(f"\nIndexes on '{table}':")
    for name, ddl in idx:
        print(" -", name, "|", ddl)


def partitions(conn, parent: str):
    with conn.cursor() as cur:
        cur.execute(
            "SELECT c.relname, pg_get_expr(c.relpartbound, c.oid) "
            "FROM pg_inherits i "
            "JOIN pg_class c ON c.oid = i.inhrelid "
            "JOIN pg_class p ON p.oid = i.inhparent "
            "WHERE p.relname = %s ORDER BY c.relname",
            (parent,),
        )
        rows = cur.fetchall()
    print(f"\nPartitions of '{parent}':")
    for name, bound in rows:
        print(" -", name, bound)
    return [name for name, _ in rows]


if __name__ == "__main__":
    print("Using DSN:", settings.pg_dsn)
    with connect() as conn:
        dump(conn, "reviews")
        dump(conn, "reviews_partitioned")
        for child in partitions(conn, "reviews_partitioned"):
            dump(conn, child)
