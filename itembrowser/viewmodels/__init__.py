"""View-models: presentation state and intents, decoupled from navigation."""

from itembrowser.viewmodels.item_detail import ItemDetailDelegate, ItemDetailViewModel
from itembrowser.viewmodels.item_list import ItemListDelegate, ItemListViewModel, ItemRowViewModel

__all__ = [
    "ItemDetailDelegate",
    "ItemDetailViewModel",
    "ItemListDelegate",
    "ItemListViewModel",
    "ItemRowViewModel",
]
