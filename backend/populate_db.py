import argparse
import os
import sys

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from database import SessionLocal, init_db
from services.seed import initial_flowers
from services.storage import CollectionStore


def load_all_data(keep_history: bool = False):
    """Resets the shop to the sample inventory."""
    init_db()
    store = CollectionStore(SessionLocal)

    flowers = initial_flowers()
    if keep_history:
        # Only the inventory is replaced; receipts and shifts survive
        store.save(flowers=flowers, alerts=[])
        print(f"Wstawiono {len(flowers)} partii kwiatów (historia zachowana).")
        return

    counts = store.reset(flowers)
    print(f"Wstawiono {counts['flowers']} partii kwiatów, wyczyszczono sprzedaż, zmiany i alerty.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the BloomPOS store with sample flowers.")
    parser.add_argument("--keep-history", action="store_true", help="Keep stored sales and shifts")
    args = parser.parse_args()
    load_all_data(keep_history=args.keep_history)
