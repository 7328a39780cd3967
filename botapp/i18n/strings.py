"""Translation strings for all user-facing messages.

Keys use dot notation for organization (e.g., 'menu.board').
"""

from typing import Dict

STRINGS: Dict[str, Dict[str, str]] = {
    "zh-TW": {
        # Main menu
        "welcome.title": "📅 設備預約管理系統",
        "welcome.message": "請選擇功能：",
        "menu.new_booking": "✏️ 新增預約",
        "menu.board": "📊 預約看板",
        "menu.list": "📋 所有預約 ({count})",

        # Navigation
        "nav.back_to_menu": "🔙 返回選單",
        "nav.cancel": "取消",
        "nav.prev_day": "⬅️ 前一天",
        "nav.next_day": "後一天 ➡️",
        "nav.refresh": "🔄 重新整理",

        # Booking form
        "form.ask_name": "請輸入預約人姓名：",
        "form.ask_password": "請設定一組刪除密碼（防誤刪）：",
        "form.ask_equipment": "請選擇設備：",
        "form.ask_date": "請選擇日期：",
        "form.ask_start": "請選擇開始時間：",
        "form.ask_end": "請選擇結束時間：",
        "form.summary_title": "請確認預約內容：",
        "form.field.user_name": "預約人",
        "form.field.password": "刪除密碼",
        "form.field.equipment": "設備",
        "form.field.date": "日期",
        "form.field.time": "時間",
        "form.confirm": "✅ 確認預約",
        "form.restart": "✏️ 重新填寫",
        "form.retime": "🕒 更改時間",
        "form.cancel": "❌ 取消",
        "form.cancelled": "已取消預約填寫。",
        "form.submitted": "✅ 預約已送出。",
        "form.error.user_name": "請輸入預約人姓名",
        "form.error.equipment_id": "請選擇設備",
        "form.error.date": "請選擇日期",
        "form.error.password": "請設定刪除密碼",
        "form.error.password_length": "刪除密碼最多 {max_length} 個字元",
        "form.error.time": "結束時間必須晚於開始時間",
        "form.error.time_grid": "請從清單中選擇開始與結束時間",
        "form.error.conflict": "時間衝突！已被 {user_name} 預約",

        # Notifications
        "notif.created": "預約成功！",
        "notif.create_failed": "連線錯誤，請重試",
        "notif.deleted": "預約已刪除，同步更新中",
        "notif.delete_failed": "刪除失敗",
        "notif.wrong_password": "密碼錯誤！",
        "notif.sync_lost": "即時同步已中斷，資料可能不是最新的，請稍後重新啟動。",

        # Board and list
        "board.pick_date": "請選擇要查看的日期：",
        "board.title": "📊 預約看板（{date}）",
        "board.free": "尚無預約",
        "list.title": "📋 所有預約（{count}）",
        "list.empty": "目前沒有任何預約",
        "view.loading": "資料載入中…",
        "view.sync_lost": "⚠️ 即時同步已中斷",
        "delete.button": "🗑 {start}-{end} {user_name}",

        # Deletion
        "delete.prompt": "請輸入預約密碼以刪除「{user_name}」的預約：",
        "alert.ack": "知道了",

        # Errors
        "error.unexpected": "❌ 發生未預期的錯誤，請稍後再試。",
    },
    "en": {
        "welcome.title": "📅 Equipment Booking System",
        "welcome.message": "Choose an option:",
        "menu.new_booking": "✏️ New booking",
        "menu.board": "📊 Booking board",
        "menu.list": "📋 All bookings ({count})",

        "nav.back_to_menu": "🔙 Back to menu",
        "nav.cancel": "Cancel",
        "nav.prev_day": "⬅️ Previous day",
        "nav.next_day": "Next day ➡️",
        "nav.refresh": "🔄 Refresh",

        "form.ask_name": "Enter the name for the booking:",
        "form.ask_password": "Set a deletion password (prevents accidental deletes):",
        "form.ask_equipment": "Select the equipment:",
        "form.ask_date": "Select a date:",
        "form.ask_start": "Select the start time:",
        "form.ask_end": "Select the end time:",
        "form.summary_title": "Please confirm the booking:",
        "form.field.user_name": "Name",
        "form.field.password": "Deletion password",
        "form.field.equipment": "Equipment",
        "form.field.date": "Date",
        "form.field.time": "Time",
        "form.confirm": "✅ Confirm booking",
        "form.restart": "✏️ Start over",
        "form.retime": "🕒 Change time",
        "form.cancel": "❌ Cancel",
        "form.cancelled": "Booking form cancelled.",
        "form.submitted": "✅ Booking submitted.",
        "form.error.user_name": "Please enter the name for the booking",
        "form.error.equipment_id": "Please select the equipment",
        "form.error.date": "Please select a date",
        "form.error.password": "Please set a deletion password",
        "form.error.password_length": "The deletion password can be at most {max_length} characters",
        "form.error.time": "End time must be after start time",
        "form.error.time_grid": "Please pick start and end times from the list",
        "form.error.conflict": "Time conflict! Already booked by {user_name}",

        "notif.created": "Booking confirmed!",
        "notif.create_failed": "Connection error, please try again",
        "notif.deleted": "Booking deleted, syncing",
        "notif.delete_failed": "Delete failed",
        "notif.wrong_password": "Wrong password!",
        "notif.sync_lost": "Live sync lost; bookings may be out of date. Please restart later.",

        "board.pick_date": "Pick a date to view:",
        "board.title": "📊 Booking board ({date})",
        "board.free": "No bookings yet",
        "list.title": "📋 All bookings ({count})",
        "list.empty": "There are no bookings",
        "view.loading": "Loading bookings…",
        "view.sync_lost": "⚠️ Live sync lost",
        "delete.button": "🗑 {start}-{end} {user_name}",

        "delete.prompt": "Enter the booking password to delete {user_name}'s booking:",
        "alert.ack": "OK",

        "error.unexpected": "❌ An unexpected error occurred. Please try again later.",
    },
}
