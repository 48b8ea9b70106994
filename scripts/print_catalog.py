import asyncio
from documentmitra.db.database import AsyncSessionLocal, engine
from documentmitra.services.record_source import SqlAlchemyRecordSource
from documentmitra.services.service_tree import build_tree, get_breadcrumbs, flatten

async def print_catalog():
    records = await SqlAlchemyRecordSource(AsyncSessionLocal).fetch_services()
    forest = build_tree(records)
    for node in flatten(forest):
        depth = len(get_breadcrumbs(forest, node.id)) - 1
        price = "" if node.price is None else (" [FREE]" if node.price == 0 else f" [₹{node.price:g}]")
        print(f"{'  ' * depth}{node.id}: {node.name}{price}")
    await engine.dispose()

if __name__ == '__main__':
    asyncio.run(print_catalog())
